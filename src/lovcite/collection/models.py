"""Seed document models written by ingestion and read by the loaders."""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from ..parser.models import (
    AmendmentReference,
    EUReference,
    ExtractedRef,
    StatuteMetadataAmendments,
)


StatuteStatus = Literal["in_force", "amended", "repealed", "not_yet_in_force"]


class LovIdentifier(BaseModel):
    """A parsed LOV identifier."""

    canonical_id: str  # LOV-2018-06-15-38
    slug: str  # 2018-06-15-38, as used in Lovdata URLs
    issued_date: str  # ISO date

    class Config:
        frozen = True


class SeedProvision(BaseModel):
    """One provision of a seed document, with the references found in it."""

    provision_ref: str
    chapter: Optional[str] = None
    section: str
    title: Optional[str] = None
    content: str
    amendments: List[AmendmentReference] = Field(default_factory=list)
    cross_references: List[ExtractedRef] = Field(default_factory=list)
    eu_references: List[EUReference] = Field(default_factory=list)


class StatuteDocument(BaseModel):
    """Seed JSON for one statute."""

    id: str
    type: Literal["statute"] = "statute"
    title: str
    short_name: Optional[str] = None
    status: StatuteStatus = "in_force"
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    url: str
    description: str = ""
    ingestion_mode: Literal["full_text", "metadata_only"] = "full_text"
    metadata: Dict[str, str] = Field(default_factory=dict)
    metadata_amendments: Optional[StatuteMetadataAmendments] = None
    provisions: List[SeedProvision] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "id": "LOV-2018-06-15-38",
                "type": "statute",
                "title": "Lov om behandling av personopplysninger (personopplysningsloven)",
                "short_name": "Personopplysningsloven",
                "status": "in_force",
                "issued_date": "2018-06-15",
                "in_force_date": "2018-07-20",
                "url": "https://lovdata.no/dokument/NL/lov/2018-06-15-38",
                "provisions": [],
            }
        }
