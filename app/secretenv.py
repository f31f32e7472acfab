from google.cloud import secretmanager
import os
import logging
from concurrent.futures import ThreadPoolExecutor

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Configuration map for secrets
SECRET_MAP = {
    "VIDYANAV_API_URL": "VIDYANAV_API_URL",
}

DEFAULTS = {
    "VIDYANAV_API_URL": "http://localhost:8080",
    "VIDYANAV_TIMEOUT_SECONDS": "120",
}

def access_secret_version(secret_id, version_id="latest"):
    client = secretmanager.SecretManagerServiceClient()
    project = os.getenv("GCP_PROJECT_ID")
    name = f"projects/{project}/secrets/{secret_id}/versions/{version_id}"
    response = client.access_secret_version(name=name)
    return response.payload.data.decode('UTF-8')

def init_secrets():
    env = os.getenv("ENV", "DEV")
    logger.debug(f"Initializing secrets for environment: {env}")
    if env == "PROD" or env == "STG":
        """Initialize environment variables concurrently"""
        if not os.getenv("GCP_PROJECT_ID"):
            raise EnvironmentError("Missing required environment variable: GCP_PROJECT_ID")

        futures = {}
        with ThreadPoolExecutor() as executor:
            for env_var, secret_suffix in SECRET_MAP.items():
                secret_id = f"VN_{env}_{secret_suffix}"
                futures[env_var] = executor.submit(
                    access_secret_version,
                    secret_id=secret_id,
                    version_id="latest"
                )

            # Set environment variables
            for env_var, future in futures.items():
                try:
                    os.environ[env_var] = future.result()
                    logger.debug(f"Set {env_var} from secret manager")
                except Exception as e:
                    logger.error(f"Failed to load secret for {env_var}: {e}")
                    raise
    else:
        # For DEV, read the local .env file and fall back to localhost
        logger.debug("Loading settings from local .env file")
        from dotenv import load_dotenv
        load_dotenv()
        for var, value in DEFAULTS.items():
            os.environ.setdefault(var, value)

    # Post-validation
    for var in SECRET_MAP:
        if not os.getenv(var):
            raise EnvironmentError(f"Missing required environment variable: {var}")

    logger.info("Successfully initialized settings")

def backend_url() -> str:
    return os.getenv("VIDYANAV_API_URL", DEFAULTS["VIDYANAV_API_URL"]).rstrip("/")

def backend_timeout() -> float:
    return float(os.getenv("VIDYANAV_TIMEOUT_SECONDS", DEFAULTS["VIDYANAV_TIMEOUT_SECONDS"]))
