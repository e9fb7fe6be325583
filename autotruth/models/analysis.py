from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional

TermFlag = Literal["normal", "warning", "high", "good"]
IssueSeverity = Literal["high", "warning", "good"]


class UploadedFile(BaseModel):
    content: bytes
    size: int
    content_type: str
    filename: Optional[str] = None


class ContractTerm(BaseModel):
    term: str
    value: str
    flag: TermFlag
    details: Optional[str] = None


class PotentialIssue(BaseModel):
    title: str
    description: str
    severity: IssueSeverity
    recommendation: Optional[str] = None


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contract_terms: List[ContractTerm] = Field(alias="contractTerms")
    potential_issues: List[PotentialIssue] = Field(alias="potentialIssues")
    trustworthiness_score: int = Field(alias="trustworthinessScore", ge=0, le=100, strict=True)
    summary: str

    def score_band(self) -> str:
        """Qualitative label for the trustworthiness score"""
        if self.trustworthiness_score >= 80:
            return "Good"
        if self.trustworthiness_score >= 60:
            return "Caution"
        return "Poor"


class AnalysisOutcome(BaseModel):
    success: bool
    data: Optional[AnalysisResult] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, result: AnalysisResult) -> "AnalysisOutcome":
        return cls(success=True, data=result)

    @classmethod
    def fail(cls, message: str) -> "AnalysisOutcome":
        return cls(success=False, error=message)

    def to_response(self) -> Dict[str, Any]:
        """Wire shape: {success, data} or {success, error}"""
        if self.success:
            return {"success": True, "data": self.data.model_dump(by_alias=True, exclude_unset=True)}
        return {"success": False, "error": self.error}
