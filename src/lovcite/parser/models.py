"""Pydantic models for parsed statute structure and extracted references."""

from typing import Optional, List, Literal
from pydantic import BaseModel, Field


class Provision(BaseModel):
    """A single section (paragraf) of a statute."""
    
    provision_ref: str  # "3:5" for chaptered statutes, "5" for flat ones
    chapter: Optional[str] = None
    section: str  # "5", "5 a"
    title: Optional[str] = None
    content: str
    
    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "provision_ref": "1:1",
                "chapter": "1",
                "section": "1",
                "title": "Lovens virkeområde",
                "content": "Denne loven gjelder.",
            }
        }


class ParseDiagnostics(BaseModel):
    """Counts of structural markers the parser decided to ignore."""

    ignored_chapter_markers: int = 0
    suppressed_section_candidates: int = 0


class ProvisionParseResult(BaseModel):
    """Output of one structural parse pass."""

    provisions: List[Provision] = Field(default_factory=list)
    diagnostics: ParseDiagnostics = Field(default_factory=ParseDiagnostics)


AmendmentType = Literal["endret", "tilføyd", "opphevet", "ikrafttredelse"]


class AmendmentReference(BaseModel):
    """A reference to the statute that amended, added or repealed a provision."""
    
    amended_by_lov: str  # LOV-YYYY-MM-DD-NN
    amendment_type: AmendmentType
    position: Literal["suffix", "inline", "transition"]
    raw_text: str
    
    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "amended_by_lov": "LOV-2014-06-20-49",
                "amendment_type": "endret",
                "position": "inline",
                "raw_text": "Endret ved lov 20 juni 2014 nr. 49",
            }
        }


class ProvisionAmendment(BaseModel):
    """Amendment references found in one provision."""

    provision_ref: str
    amendments: List[AmendmentReference] = Field(default_factory=list)


class StatuteMetadataAmendments(BaseModel):
    """Repeal information and LOV ids found in document metadata."""

    repealed_by_lov: Optional[str] = None
    repealed_date: Optional[str] = None  # ISO date
    repeal_description: Optional[str] = None
    referenced_lovs: List[str] = Field(default_factory=list)


class AmendmentSection(BaseModel):
    """One "I lov ... gjøres følgende endringer" block of an amending statute."""

    section_ref: str  # "§ 1" or "unknown"
    target_statute_id: str  # LOV id or "unknown"
    target_statute_name: Optional[str] = None
    target_provision_ref: Optional[str] = None
    change_type: Literal["endret", "tilføyd", "opphevet", "overgangsbestemmelser"] = "endret"
    new_text: Optional[str] = None
    description: Optional[str] = None


class ExtractedRef(BaseModel):
    """A domestic cross-reference found in provision text."""

    target_law_id: Optional[str] = None
    target_provision_ref: Optional[str] = None
    raw_text: str

    class Config:
        frozen = True


EUDocumentType = Literal["directive", "regulation"]
EUCommunity = Literal["EU", "EF", "EØF", "Euratom"]
ReferenceType = Literal[
    "implements",
    "supplements",
    "applies",
    "references",
    "complies_with",
    "derogates_from",
    "cites_article",
]


class EUReference(BaseModel):
    """A reference to an EU directive or regulation."""
    
    type: EUDocumentType
    id: str  # "2016/679"
    year: int
    number: int
    community: Optional[EUCommunity] = None
    issuing_body: Optional[str] = Field(default=None, alias="issuingBody")
    article: Optional[str] = None  # "6.1.c", "13-15"
    reference_type: Optional[ReferenceType] = Field(default=None, alias="referenceType")
    implementation_keyword: Optional[str] = Field(default=None, alias="implementationKeyword")
    full_text: str = Field(alias="fullText")
    context: str
    
    class Config:
        frozen = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "type": "regulation",
                "id": "2016/679",
                "year": 2016,
                "number": 679,
                "community": "EU",
                "referenceType": "applies",
                "fullText": "forordning (EU) 2016/679",
                "context": "... forordning (EU) 2016/679 ...",
            }
        }

    @property
    def dedup_key(self) -> tuple:
        return (self.type, self.id, self.community)


class LegalDefinition(BaseModel):
    """A term defined in a statute ("Med X menes ...")."""

    document_id: str
    term: str
    definition: str
    source_provision: str
