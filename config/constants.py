"""Constants used across the application."""

from enum import Enum


# API paths (relative to the configured base URL)
API_PREFIX = "/api"
PROFILES_PATH = "/profiles"
UPLOAD_PATH = "/upload"


# User-facing error messages
class ErrorMessage(str, Enum):
    FETCH = "Failed to fetch profiles"
    CREATE = "Failed to create profile"
    UPDATE = "Failed to update profile"
    DELETE = "Failed to delete profile"
    UPLOAD = "Failed to upload file"
    FILE_TOO_LARGE = "File size must be less than 5MB"
    NOT_AN_IMAGE = "Only image files are allowed"
    TOO_MANY_FILES = "Only one file can be uploaded at a time"
    UPLOAD_BUSY = "An upload is already in progress"


# Avatar uploads
MAX_UPLOAD_BYTES = 5 * 1024 * 1024
IMAGE_MEDIA_PREFIX = "image/"
IMAGE_EXTENSIONS = [".jpeg", ".jpg", ".png", ".gif", ".webp"]

# Suggested countries for the profile form (not enforced server-side)
COUNTRIES = [
    "United States",
    "Canada",
    "United Kingdom",
    "Australia",
    "Germany",
    "France",
    "Japan",
    "India",
    "Brazil",
    "Mexico",
]
