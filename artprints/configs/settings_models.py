import os
from typing import Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceConfig(BaseSettings):
    """Base class for service configurations with internal/external URL handling."""

    service_name: str
    service_port: int
    external_host: str = Field(default="localhost")
    external_port: int
    external_protocol: str = Field(default="http")
    public_url: Optional[str] = Field(default=None)

    @property
    def internal_url(self) -> str:
        """URL for internal service-to-service communication."""
        return f"http://{self.service_name}:{self.service_port}"

    @property
    def external_url(self) -> str:
        """URL for external access."""
        if self.public_url:
            return self.public_url.rstrip("/")
        return f"{self.external_protocol}://{self.external_host}:{self.external_port}"

    @property
    def url(self) -> str:
        context = os.getenv("ARTPRINTS_CONTEXT", "client")

        if context == "server" and not self.public_url:
            return self.internal_url

        return self.external_url

    @property
    def port(self) -> int:
        return self.external_port


class BackendConfig(ServiceConfig):
    """Marketplace REST API (artworks, profiles, sessions, orders)."""

    service_name: str = Field(default="artprints-backend")
    service_port: int = Field(default=3001)
    external_port: int = Field(default=3001)
    session_cookie_name: str = Field(
        default="session", description="Cookie set by /sessionLogin and sent back on every call"
    )

    model_config = SettingsConfigDict(env_prefix="ARTPRINTS_BACKEND_")


class DashConfig(ServiceConfig):
    service_name: str = Field(default="artprints-frontend")
    service_port: int = Field(default=5080)
    external_port: int = Field(default=5080)
    host: str = Field(default="0.0.0.0")
    debug: bool = Field(default=False)
    title: str = Field(default="ArtPrints Kanairo")

    model_config = SettingsConfigDict(env_prefix="ARTPRINTS_DASH_")


class FirebaseConfig(BaseSettings):
    """Identity provider and document store, both reached over their REST APIs."""

    api_key: str = Field(default="")
    project_id: str = Field(default="")
    identity_toolkit_url: str = Field(default="https://identitytoolkit.googleapis.com/v1")
    secure_token_url: str = Field(default="https://securetoken.googleapis.com/v1")
    firestore_url: str = Field(default="https://firestore.googleapis.com/v1")
    firestore_enabled: bool = Field(
        default=True, description="Record uploaded images in the Firestore 'images' collection"
    )
    images_collection: str = Field(default="images")

    model_config = SettingsConfigDict(env_prefix="ARTPRINTS_FIREBASE_")

    @computed_field
    @property
    def firestore_documents_url(self) -> str:
        return f"{self.firestore_url}/projects/{self.project_id}/databases/(default)/documents"


class CloudinaryConfig(BaseSettings):
    cloud_name: Optional[str] = Field(default=None)
    secure: bool = Field(default=True)
    thumbnail_width: int = Field(default=600, description="Width of gallery thumbnails")

    model_config = SettingsConfigDict(env_prefix="ARTPRINTS_CLOUDINARY_")


class GalleryConfig(BaseSettings):
    skeleton_count: int = Field(
        default=8, description="Skeleton cards appended while a page is loading"
    )
    thumbnail_height: int = Field(default=192)
    blurhash_size: int = Field(
        default=32, description="Width and height of decoded blurhash placeholders"
    )
    currency: str = Field(default="KES")

    model_config = SettingsConfigDict(env_prefix="ARTPRINTS_GALLERY_")


class UploadConfig(BaseSettings):
    max_size_bytes: int = Field(default=5 * 1024 * 1024)
    accepted_extensions: str = Field(default=".png,.jpg,.jpeg,.webp")

    model_config = SettingsConfigDict(env_prefix="ARTPRINTS_UPLOAD_")

    @computed_field
    @property
    def extensions(self) -> tuple[str, ...]:
        """Parse accepted extensions into a lowercase tuple."""
        return tuple(e.strip().lower() for e in self.accepted_extensions.split(",") if e.strip())


class LoggingConfig(BaseSettings):
    verbosity_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_prefix="ARTPRINTS_LOGGING_")


class PerformanceConfig(BaseSettings):
    api_request_timeout: float = Field(
        default=10.0, description="Timeout in seconds for backend and provider calls"
    )
    upload_timeout: float = Field(default=60.0)

    model_config = SettingsConfigDict(env_prefix="ARTPRINTS_PERFORMANCE_")


class Settings(BaseSettings):
    backend: BackendConfig = Field(default_factory=BackendConfig)
    dash: DashConfig = Field(default_factory=DashConfig)
    firebase: FirebaseConfig = Field(default_factory=FirebaseConfig)
    cloudinary: CloudinaryConfig = Field(default_factory=CloudinaryConfig)
    gallery: GalleryConfig = Field(default_factory=GalleryConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)

    model_config = SettingsConfigDict(env_prefix="ARTPRINTS_")
