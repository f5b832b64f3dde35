# persona_api/config.py
import os
import json
import logging
from typing import Dict, Any, Optional

import boto3
from botocore.exceptions import ClientError
from dotenv import load_dotenv
from pydantic import BaseModel

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Configure logging
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


# Load environment variables from .env file
load_dotenv()


class AppConfig(BaseModel):
    CLIENT_ID: str = "persona-lab"
    ENV_TIER: str = "local"
    AWS_DEFAULT_REGION: str = "us-east-2"
    LOCAL_MODE: bool = True
    LOCAL_STORAGE_PATH: str = "./storage"
    SCORING_RULES_PATH: Optional[str] = None
    S3_BUCKET_NAME: str = "persona-config"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    NAME_SEED: Optional[int] = None

    # dynamically construct the full bucket name
    @property
    def FULL_S3_BUCKET_NAME(self):
        return f"{self.CLIENT_ID}-{self.ENV_TIER}-{self.S3_BUCKET_NAME}"

    def is_local_mode(self):
        return self.LOCAL_MODE

    def _load_local_file(self, key: str) -> Dict[str, Any]:
        file_path = os.path.join(self.LOCAL_STORAGE_PATH, key)
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def load_json_file(self, key: str) -> Dict[str, Any]:
        """Read a JSON document from local storage or the config bucket."""
        if self.is_local_mode():
            logger.info(f"Loading {key} from local storage")
            return self._load_local_file(key)

        logger.info(f"Loading {key} from s3://{self.FULL_S3_BUCKET_NAME}")
        s3_client = boto3.client("s3", region_name=self.AWS_DEFAULT_REGION)
        try:
            response = s3_client.get_object(Bucket=self.FULL_S3_BUCKET_NAME, Key=key)
        except ClientError as e:
            raise RuntimeError(f"AWS Error loading {key}: {e}")
        return json.loads(response["Body"].read().decode("utf-8"))

    @classmethod
    def load(cls):
        local_mode = os.getenv("LOCAL_MODE", "true").lower() == "true"

        optional_vars = [
            "SCORING_RULES_PATH",
            "S3_BUCKET_NAME",
            "PORT",
            "LOG_LEVEL",
            "NAME_SEED",
        ]

        if local_mode:
            config = {var: os.getenv(var) for var in optional_vars if os.getenv(var)}
        else:
            CLIENT_ID = os.environ["CLIENT_ID"]
            ENV_TIER = os.environ["ENV_TIER"]
            AWS_REGION = os.environ["AWS_DEFAULT_REGION"]

            ssm = boto3.client("ssm", region_name=AWS_REGION)
            param_paths = [f"{CLIENT_ID}/{ENV_TIER}/{var}" for var in optional_vars]

            try:
                response = ssm.get_parameters(Names=param_paths, WithDecryption=True)
            except ClientError as e:
                raise RuntimeError(f"AWS Error: {e}")

            aws_params = {
                param["Name"]: param["Value"] for param in response["Parameters"]
            }
            if response.get("InvalidParameters"):
                logger.info(
                    f"Using defaults for unset parameters: {response['InvalidParameters']}"
                )
            config = {
                var: aws_params[f"{CLIENT_ID}/{ENV_TIER}/{var}"]
                for var in optional_vars
                if f"{CLIENT_ID}/{ENV_TIER}/{var}" in aws_params
            }

        for var in ["CLIENT_ID", "ENV_TIER", "AWS_DEFAULT_REGION", "LOCAL_STORAGE_PATH"]:
            if os.getenv(var):
                config[var] = os.environ[var]
        config["LOCAL_MODE"] = local_mode

        return cls(**config)


def configure_logging(level: str) -> None:
    logging.getLogger().setLevel(level.upper())


# Singleton instance initialized here
app_config = AppConfig.load()
