import copy
import json

import pytest

from autotruth.models.analysis import UploadedFile
from autotruth.services.analyzer import ContractAnalyzer

SAMPLE_ANALYSIS = {
    "contractTerms": [
        {"term": "Purchase Price", "value": "$28,450", "flag": "normal", "details": "In line with market value"},
        {"term": "APR", "value": "14.9%", "flag": "high", "details": "Well above the prime auto loan rate"},
        {"term": "Documentation Fee", "value": "$899", "flag": "warning", "details": "Higher than the state average"},
    ],
    "potentialIssues": [
        {
            "title": "Above-market interest rate",
            "description": "The APR is several points above typical rates for this credit tier.",
            "severity": "high",
            "recommendation": "Get a pre-approved loan from a credit union and ask the dealer to match it.",
        },
    ],
    "trustworthinessScore": 58,
    "summary": "The price is fair but financing terms and fees are costly.",
}


class StubClient:
    """Deterministic stand-in for the Gemini client"""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def generate_content(self, parts):
        self.calls.append(parts)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def sample_analysis():
    return copy.deepcopy(SAMPLE_ANALYSIS)


@pytest.fixture
def fenced_reply(sample_analysis):
    return "```json\n" + json.dumps(sample_analysis, indent=2) + "\n```"


@pytest.fixture
def png_upload():
    content = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
    return UploadedFile(content=content, size=len(content), content_type="image/png", filename="contract.png")


@pytest.fixture
def make_analyzer():
    def _make(reply=None, error=None):
        client = StubClient(reply=reply, error=error)
        return ContractAnalyzer(client=client), client
    return _make
