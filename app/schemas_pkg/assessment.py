from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ContactInfo(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr


class AssessmentRequest(BaseModel):
    # Keyed by question number: {"2": "7", ...} or a list indexed the same way
    answers: Union[Dict[str, Any], List[Any]]
    contact_info: ContactInfo = Field(..., alias="contactInfo")


class Analysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    overall_score: int = Field(..., serialization_alias="overallScore")
    primary_focus: str = Field(..., serialization_alias="primaryFocus")
    recommendations: List[str]
    next_steps: List[str] = Field(..., serialization_alias="nextSteps")


class AssessmentResponse(BaseModel):
    success: bool = True
    analysis: Analysis
