import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:128.0) Gecko/20100101 Firefox/128.0"
)


class Localization(BaseModel):
    """Idioma + país usados nos pedidos (ex: en-GB)."""

    model_config = ConfigDict(frozen=True)

    language_code: str
    country_code: str = ""

    @property
    def localization_code(self) -> str:
        if not self.country_code:
            return self.language_code
        return f"{self.language_code}-{self.country_code}"

    @classmethod
    def from_localization_code(cls, code: str) -> "Localization":
        """Parse ``"pt-BR"`` / ``"pt_BR"`` / ``"pt"``."""
        parts = code.replace("_", "-").split("-")
        if not parts[0] or not parts[0].isalpha():
            raise ValueError(f"Not a valid localization code: {code}")
        country = parts[1].upper() if len(parts) > 1 else ""
        return cls(language_code=parts[0].lower(), country_code=country)

    def __str__(self) -> str:
        return f"Localization[{self.localization_code}]"


class ContentCountry(BaseModel):
    model_config = ConfigDict(frozen=True)

    country_code: str

    def __str__(self) -> str:
        return self.country_code


DEFAULT_LOCALIZATION = Localization(language_code="en", country_code="GB")
DEFAULT_CONTENT_COUNTRY = ContentCountry(country_code=DEFAULT_LOCALIZATION.country_code)


class ExtractorConfig(BaseModel):
    """
    Configuração passada explicitamente para cada chamada.

    Nothing here lives on a long-lived extractor object: code that needs a
    locale or a country receives the whole config as an argument.
    """

    model_config = ConfigDict(frozen=True)

    localization: Localization = DEFAULT_LOCALIZATION
    content_country: ContentCountry = DEFAULT_CONTENT_COUNTRY
    user_agent: str = DEFAULT_USER_AGENT
    timeout: int = Field(default=15, ge=1)
    retries: int = Field(default=3, ge=0)
    backoff_factor: float = Field(default=0.3, ge=0)
    consent_accepted: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    def log_level_must_exist(cls, v):
        level = str(v).strip().upper()
        if not isinstance(getattr(logging, level, None), int):
            raise ValueError(f"log_level inválido: {v}")
        return level

    @property
    def accept_language(self) -> str:
        """Valor do header Accept-Language, ex: 'pt-BR, pt;q=0.9'."""
        loc = self.localization
        if not loc.country_code:
            return loc.language_code
        return f"{loc.localization_code}, {loc.language_code};q=0.9"

    @property
    def consent_cookie(self) -> str:
        return "SOCS=CAISAiAD" if self.consent_accepted else "SOCS=CAE="


def configure_logging(config: Optional[ExtractorConfig] = None) -> logging.Logger:
    """Apply ``config.log_level`` to the package logger and return it."""
    config = config or ExtractorConfig()
    logger = logging.getLogger("link_extractor")
    logger.setLevel(config.log_level)
    return logger


class ResolveJobConfig(BaseModel):
    """
    Contrato de um job de resolução de links.
    Valida o payload recebido pelo flow antes de qualquer trabalho.
    """

    job_name: str
    service: str = "YouTube"
    urls: List[str] = Field(min_length=1)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)

    @field_validator("job_name")
    def job_name_must_be_slug(cls, v):
        if " " in v:
            raise ValueError("job_name não deve conter espaços")
        return v.lower()


class SearchJobConfig(BaseModel):
    job_name: str
    service: str = "YouTube"
    query: str = Field(min_length=1)
    content_filters: List[str] = Field(default_factory=list)
    sort_filter: Optional[str] = None
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)

    @field_validator("job_name")
    def job_name_must_be_slug(cls, v):
        if " " in v:
            raise ValueError("job_name não deve conter espaços")
        return v.lower()
