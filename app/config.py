import os
from typing import List

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Supabase (read lazily by app.infra.supabase.client)
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

# Table names
TASKS_TABLE = os.getenv("TASKS_TABLE", "tasks")
USERS_TABLE = os.getenv("USERS_TABLE", "users")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS
CORS_ALLOW_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
