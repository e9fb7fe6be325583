from typing import Any, Dict, List, Optional, Protocol
import base64
import logging
import time

from autotruth.config import MAX_UPLOAD_BYTES
from autotruth.models.analysis import AnalysisOutcome, UploadedFile
from autotruth.services.errors import (
    AnalysisError,
    FileTooLargeError,
    MissingFileError,
    ModelTransitionError,
    ParseFailureError,
    ThrottledError,
    UnsupportedTypeError,
)
from autotruth.services.llm import inline_part, text_part
from autotruth.services.response_parser import parse_analysis
from autotruth.services.validator import validate_upload

logger = logging.getLogger(__name__)

MODEL_TRANSITION_MESSAGE = "The AI model is being updated. Please try again in a few moments."
THROTTLED_MESSAGE = "Too many requests. Please try again in a few minutes."
PARSE_FAILURE_MESSAGE = "Unable to analyze the contract. Please try a clearer image or a different file."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while analyzing the contract."

CONTRACT_ANALYSIS_PROMPT = """
You are an experienced auditor of car purchase contracts. Analyze the attached contract in detail.

1. CONTRACT TERMS: Extract every key term, including purchase price, interest rate (APR), loan term,
   down payment, monthly payment, dealer fees, documentation fees, warranties, insurance and add-ons.
   For each term give:
   - the exact value as written
   - a flag: "normal", "warning" (concerning), "high" (highly concerning) or "good" (favorable)
   - details explaining why the term was flagged, when it is not normal

2. POTENTIAL ISSUES: Identify concerning elements such as above-market interest rates, overpriced
   warranties or add-ons, excessive fees, unfavorable clauses, below-market trade-in values and
   missing information. For each issue give:
   - a clear title
   - a detailed description
   - a severity: "high", "warning" or "good"
   - a specific recommendation for the buyer

3. TRUSTWORTHINESS SCORE: An integer from 0 to 100 for the overall fairness and transparency of the contract:
   - 0-59: Poor (many concerning terms)
   - 60-79: Caution (some concerning terms)
   - 80-100: Good (few or no concerning terms)

4. SUMMARY: One concise paragraph with the key findings and recommendations.

Respond with a JSON object of exactly this structure:
{
  "contractTerms": [
    {"term": "string", "value": "string", "flag": "normal|warning|high|good", "details": "string"}
  ],
  "potentialIssues": [
    {"title": "string", "description": "string", "severity": "high|warning|good", "recommendation": "string"}
  ],
  "trustworthinessScore": number,
  "summary": "string"
}

Return ONLY the JSON object, with no additional text.
"""


class ContentGenerator(Protocol):
    def generate_content(self, parts: List[Dict[str, Any]]) -> str: ...


def classify_error(error: Optional[BaseException]) -> str:
    """Turn any failure into the message shown to the user"""
    if error is None:
        return UNKNOWN_ERROR_MESSAGE

    if isinstance(error, ModelTransitionError):
        return MODEL_TRANSITION_MESSAGE
    if isinstance(error, ThrottledError):
        return THROTTLED_MESSAGE
    if isinstance(error, ParseFailureError):
        return PARSE_FAILURE_MESSAGE

    if isinstance(error, (MissingFileError, FileTooLargeError, UnsupportedTypeError)):
        return error.message

    # untagged external failures still carry the provider's wording
    message = error.message if isinstance(error, AnalysisError) else str(error)
    if "deprecated" in message:
        return MODEL_TRANSITION_MESSAGE
    if "rate limit" in message:
        return THROTTLED_MESSAGE
    if "parse" in message:
        return PARSE_FAILURE_MESSAGE

    return message or UNKNOWN_ERROR_MESSAGE


class ContractAnalyzer:
    """Validate an upload, send it to the model once and parse the reply"""

    def __init__(self, client: ContentGenerator, max_bytes: int = MAX_UPLOAD_BYTES):
        self.client = client
        self.max_bytes = max_bytes

    def analyze(self, upload: Optional[UploadedFile]) -> AnalysisOutcome:
        try:
            validate_upload(upload, max_bytes=self.max_bytes)

            logger.info("Analyzing %s (%s, %d bytes)", upload.filename or "upload", upload.content_type, upload.size)
            encoded = base64.b64encode(upload.content).decode("ascii")

            started = time.perf_counter()
            text = self.client.generate_content([
                text_part(CONTRACT_ANALYSIS_PROMPT),
                inline_part(encoded, upload.content_type),
            ])
            logger.info("Gemini replied in %.2fs (%d chars)", time.perf_counter() - started, len(text or ""))

            result = parse_analysis(text)
        except Exception as e:
            message = classify_error(e)
            status = getattr(e, "status_code", 500)
            logger.warning("Contract analysis failed (%s, status=%s): %s", type(e).__name__, status, e)
            return AnalysisOutcome.fail(message)

        logger.info("Analysis complete: score=%d (%s)", result.trustworthiness_score, result.score_band())
        return AnalysisOutcome.ok(result)
