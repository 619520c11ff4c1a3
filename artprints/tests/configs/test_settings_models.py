import os
from contextlib import contextmanager

from artprints.configs.settings_models import (
    BackendConfig,
    CloudinaryConfig,
    DashConfig,
    FirebaseConfig,
    Settings,
    UploadConfig,
)


@contextmanager
def env_vars(env_dict):
    """Context manager for temporarily setting environment variables."""
    original = {key: os.environ.get(key) for key in env_dict}
    try:
        for key, value in env_dict.items():
            if value is not None:
                os.environ[key] = value
            elif key in os.environ:
                del os.environ[key]
        yield
    finally:
        for key, value in original.items():
            if value is not None:
                os.environ[key] = value
            elif key in os.environ:
                del os.environ[key]


class TestBackendConfig:
    def test_default_values(self):
        env_to_clear = {
            "ARTPRINTS_BACKEND_EXTERNAL_PORT": None,
            "ARTPRINTS_BACKEND_PUBLIC_URL": None,
            "ARTPRINTS_CONTEXT": None,
        }
        with env_vars(env_to_clear):
            config = BackendConfig()

            assert config.service_name == "artprints-backend"
            assert config.port == 3001
            assert config.session_cookie_name == "session"
            assert config.url == "http://localhost:3001"

    def test_public_url_wins(self):
        with env_vars({"ARTPRINTS_BACKEND_PUBLIC_URL": "https://api.kanairo.art/"}):
            config = BackendConfig()

            assert config.url == "https://api.kanairo.art"

    def test_server_context_uses_internal_url(self):
        with env_vars({"ARTPRINTS_CONTEXT": "server", "ARTPRINTS_BACKEND_PUBLIC_URL": None}):
            config = BackendConfig()

            assert config.url == "http://artprints-backend:3001"


class TestDashConfig:
    def test_env_overrides(self):
        with env_vars({"ARTPRINTS_DASH_EXTERNAL_PORT": "8050", "ARTPRINTS_DASH_DEBUG": "true"}):
            config = DashConfig()

            assert config.port == 8050
            assert config.debug is True
            assert config.title == "ArtPrints Kanairo"


class TestFirebaseConfig:
    def test_documents_url(self):
        with env_vars({"ARTPRINTS_FIREBASE_PROJECT_ID": "kanairo"}):
            config = FirebaseConfig()

            assert config.firestore_documents_url == (
                "https://firestore.googleapis.com/v1/projects/kanairo/databases/(default)/documents"
            )
            assert config.images_collection == "images"


class TestUploadConfig:
    def test_default_extensions(self):
        with env_vars({"ARTPRINTS_UPLOAD_ACCEPTED_EXTENSIONS": None}):
            assert UploadConfig().extensions == (".png", ".jpg", ".jpeg", ".webp")

    def test_extensions_are_normalized(self):
        with env_vars({"ARTPRINTS_UPLOAD_ACCEPTED_EXTENSIONS": " .PNG, .Gif ,,"}):
            assert UploadConfig().extensions == (".png", ".gif")


class TestSettings:
    def test_nested_sections_read_their_own_prefix(self):
        with env_vars(
            {
                "ARTPRINTS_CLOUDINARY_CLOUD_NAME": "kanairo",
                "ARTPRINTS_GALLERY_SKELETON_COUNT": "4",
            }
        ):
            settings = Settings()

            assert settings.cloudinary.cloud_name == "kanairo"
            assert settings.gallery.skeleton_count == 4
            assert settings.upload.max_size_bytes == 5 * 1024 * 1024

    def test_cloudinary_disabled_by_default(self):
        with env_vars({"ARTPRINTS_CLOUDINARY_CLOUD_NAME": None}):
            assert CloudinaryConfig().cloud_name is None


class TestConfigModule:
    def test_module_constants_follow_settings(self):
        from artprints.configs import config

        assert config.API_BASE_URL == config.settings.backend.url
        assert not hasattr(config, "DASH_BASE_URL")
