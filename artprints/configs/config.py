from artprints.configs.logging_init import initialize_loggers, logger
from artprints.configs.settings_models import Settings

# Settings
# Overwrite priority: environment variables > default values
settings = Settings()

initialize_loggers(verbose_level=settings.logging.verbosity_level)

API_BASE_URL = settings.backend.url

logger.debug(f"Backend API: {API_BASE_URL}")

if not settings.firebase.api_key:
    logger.warning("ARTPRINTS_FIREBASE_API_KEY is not set - sign in and sign up will fail")
