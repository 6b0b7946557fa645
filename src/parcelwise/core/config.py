"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class ProbeAttempt(BaseModel):
    """One rung of a GetFeatureInfo retry ladder."""

    info_format: str
    version: str = "1.1.1"


class CadastreConfig(BaseSettings):
    """Cadastral lookup (ULDK) configuration."""

    model_config = {"env_prefix": "PARCELWISE_CADASTRE_"}

    provider: str = "uldk"
    base_url: str = "https://uldk.gugik.gov.pl/"
    result_fields: str = "teryt,voivodeship,county,commune,region,parcel,geom_wkt"
    srid: int = 4326
    timeout_seconds: float = 15.0


class MapServiceConfig(BaseSettings):
    """Land-use and zoning-plan map service configuration."""

    model_config = {"env_prefix": "PARCELWISE_MAPS_"}

    land_use_url: str = (
        "https://integracja.gugik.gov.pl/cgi-bin/KrajowaIntegracjaUzytkowGruntowych"
    )
    land_use_layers: str = "dzialki,uzytki,klasouzytki"
    land_use_image_size: int = 11
    land_use_ladder: list[ProbeAttempt] = Field(
        default_factory=lambda: [
            ProbeAttempt(info_format="text/html"),
            ProbeAttempt(info_format="text/xml"),
            ProbeAttempt(info_format="text/html", version="1.3.0"),
        ]
    )

    zoning_url: str = (
        "https://mapy.geoportal.gov.pl/wss/ext/"
        "KrajowaIntegracjaMiejscowychPlanowZagospodarowaniaPrzestrzennego"
    )
    zoning_layers: str = "wektor-pow,wektor-lin,wektor-str,wektor-pkt,plany"
    zoning_fallback_layers: str = "plany,plany_granice"
    zoning_image_size: int = 101
    zoning_ladder: list[ProbeAttempt] = Field(
        default_factory=lambda: [
            ProbeAttempt(info_format="text/html"),
            ProbeAttempt(info_format="text/plain"),
            ProbeAttempt(info_format="text/html", version="1.3.0"),
        ]
    )

    bbox_half_width_deg: float = 0.0005
    feature_count: int = 20
    timeout_seconds: float = 15.0
    min_usable_length: int = 20

    feature_page_timeout_seconds: float = 10.0
    max_feature_pages: int = 6

    land_use_diagnostic_chars: int = 800
    zoning_diagnostic_chars: int = 1000


class DocumentConfig(BaseSettings):
    """Act document resolution configuration."""

    model_config = {"env_prefix": "PARCELWISE_DOCUMENTS_"}

    timeout_seconds: float = 20.0
    user_agent: str = "parcelwise/0.1"
    extension: str = ".pdf"
    content_type_marker: str = "pdf"


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "PARCELWISE_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    cadastre: CadastreConfig = Field(default_factory=CadastreConfig)
    maps: MapServiceConfig = Field(default_factory=MapServiceConfig)
    documents: DocumentConfig = Field(default_factory=DocumentConfig)
