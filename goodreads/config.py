"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""
    
    # API
    GOODREADS_API_KEY = os.getenv("GOODREADS_API_KEY", "")
    GOODREADS_BASE_URL = os.getenv("GOODREADS_BASE_URL", "https://www.goodreads.com")
    
    # Defaults
    DEFAULT_TIMEOUT = int(os.getenv("DEFAULT_TIMEOUT", "10"))
    DEFAULT_LIMIT = int(os.getenv("DEFAULT_LIMIT", "10"))
