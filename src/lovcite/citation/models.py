"""Pydantic models for parsed citations."""

from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, model_validator


class DocumentType(str, Enum):
    """Kinds of legal documents a citation can point at."""

    STATUTE = "statute"
    BILL = "bill"
    SOU = "sou"  # report series: NOU (current) or SOU (legacy)
    DS = "ds"
    CASE_LAW = "case_law"


class CitationFormat(str, Enum):
    """Output styles for formatted citations."""

    FULL = "full"
    SHORT = "short"
    PINPOINT = "pinpoint"


class ParsedCitation(BaseModel):
    """A citation string broken into its parts."""
    
    raw: str
    type: DocumentType = DocumentType.STATUTE
    document_id: str = ""
    chapter: Optional[str] = None
    section: Optional[str] = None
    page: Optional[str] = None
    valid: bool = False
    error: Optional[str] = None
    
    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "raw": "LOV-2018-06-15-38 § 5",
                "type": "statute",
                "document_id": "LOV-2018-06-15-38",
                "section": "5",
                "valid": True,
            }
        }

    @model_validator(mode="after")
    def _check_invalid_has_error(self) -> "ParsedCitation":
        if not self.valid:
            if self.document_id:
                raise ValueError("invalid citation must not carry a document_id")
            if not self.error:
                raise ValueError("invalid citation must carry an error message")
        return self

    @classmethod
    def invalid(cls, raw: str, error: str) -> "ParsedCitation":
        """Build a failed parse result."""
        return cls(raw=raw, type=DocumentType.STATUTE, document_id="", valid=False, error=error)


class StoredDocument(BaseModel):
    """The subset of a stored document the validator needs."""

    id: str
    type: DocumentType = DocumentType.STATUTE
    title: str
    status: str = "in_force"  # in_force | amended | repealed | not_yet_in_force


class CitationValidation(BaseModel):
    """Result of checking a citation against the stored dataset."""

    citation: str
    parsed: ParsedCitation
    valid: bool = False
    document_exists: bool = False
    provision_exists: Optional[bool] = None
    document_title: Optional[str] = None
    formatted_citation: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
