from __future__ import annotations

from pydantic import BaseModel, Field

from auto_nbsp.formatting.config import NBSP_ENTITY, NbspConfig


class ErrorEnvelope(BaseModel):
    code: str
    message: str


class RuleOptions(BaseModel):
    prepositions_conjunctions: bool = True
    articles: bool = True
    abbreviations: bool = True
    titles: bool = True
    units: bool = False
    months: bool = True
    after_numbers: bool = True
    between_numbers: bool = True


class NbspOptions(BaseModel):
    language: str = Field(default="en", min_length=1, max_length=35)
    # language-or-"*" -> category -> tokens
    custom_replacements: dict[str, dict[str, list[str]]] = Field(default_factory=dict)
    rules: RuleOptions = Field(default_factory=RuleOptions)
    debug: bool = False
    marker: str = Field(default=NBSP_ENTITY, min_length=1)

    def to_config(self) -> NbspConfig:
        return NbspConfig(
            language=self.language,
            custom_replacements=self.custom_replacements,
            debug=self.debug,
            marker=self.marker,
            **self.rules.model_dump(),
        )


class NbspRequest(BaseModel):
    text: str
    options: NbspOptions | None = None


class NbspResponse(BaseModel):
    text: str
    stats: dict[str, int] = Field(default_factory=dict)


class RulesResponse(BaseModel):
    language: str
    rules: dict[str, list[str]]
