import pathlib

from starlette.config import Config

ROOT = pathlib.Path(__file__).resolve().parent.parent  # signl4step/
BASE_DIR = ROOT.parent  # ./

try:
    config = Config(BASE_DIR / ".env")
except FileNotFoundError:
    config = Config()

SIGNL4_WEBHOOK_URL = config(
    "SIGNL4_WEBHOOK_URL", default="https://connect.signl4.com/webhook"
)
# identifies this integration to SIGNL4, must stay in sync with the resolve payload
SIGNL4_SOURCE_SYSTEM = config("SIGNL4_SOURCE_SYSTEM", default="n8n")
SIGNL4_REQUEST_TIMEOUT = config("SIGNL4_REQUEST_TIMEOUT", cast=float, default=30)
