from autotruth.services.analyzer import ContractAnalyzer
from autotruth.services.llm import build_gemini_client


def get_analyzer() -> ContractAnalyzer:
    return ContractAnalyzer(client=build_gemini_client())
