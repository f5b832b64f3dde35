# lambda_function.py
import logging
from mangum import Mangum

from persona_api.main import app

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Runs and personas live only as long as the Lambda container does
handler = Mangum(app, lifespan="off")
logger.info("Mangum handler created for persona API")
