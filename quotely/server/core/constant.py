"""Constants shared by the server package."""

PROJECT_NAME = "Quotely"
API_V1_STR = "/api/v1"
API_VERSION = "0.1.0"
SCHEMA_VERSION = "v1"
