from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel

from courtplay.config import PlayTemplate


class TemplateSummaryResponse(BaseModel):
    template_id: str
    name: str
    description: str
    play_type: str
    court_template: str
    tags: List[str]

    @classmethod
    def from_template(cls, template: PlayTemplate) -> "TemplateSummaryResponse":
        return cls(
            template_id=template.template_id,
            name=template.name,
            description=template.description,
            play_type=template.play_type,
            court_template=template.court_template,
            tags=list(template.tags),
        )


class TemplateResponse(TemplateSummaryResponse):
    document: Dict[str, Any]

    @classmethod
    def from_template(cls, template: PlayTemplate) -> "TemplateResponse":
        summary = TemplateSummaryResponse.from_template(template)
        return cls(**summary.model_dump(), document=template.document.to_payload())
