"""
config.py — Environment Settings for the Pedidos Service

All settings come from environment variables. A local `.env` file is loaded
first, so development machines do not need to export anything by hand.
"""

import os

from dotenv import load_dotenv

load_dotenv()

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "3000"))

# Secret Manager
GCP_PROJECT_ID = os.environ.get("GCP_PROJECT_ID")
SECRET_BACKEND = os.environ.get("SECRET_BACKEND", "gcp")
REQUIRED_SECRETS = [
    name.strip()
    for name in os.environ.get("REQUIRED_SECRETS", "db_password").split(",")
    if name.strip()
]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("LOG_FILE", "pedidos_service.log")
