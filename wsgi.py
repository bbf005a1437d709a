"""WSGI entry point for production deployment."""
import sys
import os
import atexit
import logging
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).parent))

from config import load_config
from utils.logger import setup_logging
from definitions import create_definitions
from alerts.service import AlertsService
from alerts.channels import FileChannel, EmailChannel
from web.app import create_app

logger = logging.getLogger("alertsvc.wsgi")

config = load_config(os.environ.get("ALERTSVC_CONFIG"))
setup_logging(config["logging"].get("level", "INFO"), config["logging"].get("file"))

definitions = create_definitions(config)
atexit.register(definitions.close)

channels = []
file_cfg = config["channels"].get("file", {})
if file_cfg.get("enabled", True):
    channels.append(FileChannel(file_cfg.get("path", "data/actions.jsonl")))
if config["email"].get("enabled", False):
    channels.append(EmailChannel(config))

engines = {
    "definitions": definitions,
    "alerts": AlertsService(channels, config["actions"]),
}

app = create_app(config, engines)
logger.info(f"Definitions backend: {config['definitions']['backend']}")
