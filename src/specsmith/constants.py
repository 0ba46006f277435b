# src/specsmith/constants.py
from __future__ import annotations

# Source keys, as used by the upload form and the CLI flags.
SOURCE_OPENAPI = "openapi"
SOURCE_GRAPHQL = "graphql"
SOURCE_DOMAIN = "domain"
SOURCE_METADATA = "metadata"
SOURCE_OUTPUT_PREFS = "outputprefs"

SPEC_SOURCES = (SOURCE_OPENAPI, SOURCE_GRAPHQL, SOURCE_DOMAIN)
ALL_SOURCES = (*SPEC_SOURCES, SOURCE_METADATA, SOURCE_OUTPUT_PREFS)

SOURCE_LABELS = {
    SOURCE_OPENAPI: "OpenAPI specification",
    SOURCE_GRAPHQL: "GraphQL schema",
    SOURCE_DOMAIN: "domain model",
    SOURCE_METADATA: "metadata",
    SOURCE_OUTPUT_PREFS: "output preferences",
}

DEFAULT_PROJECT_NAME = "GeneratedProject"
DEFAULT_PACKAGE_PREFIX = "com.example"

GAP_REPORT_FILE_NAME = "GAP_REPORT.md"
README_FILE_NAME = "README.md"
AI_RESPONSE_FILE_NAME = "openai_response.json"

MAIN_SOURCE_ROOT = "src/main/java"
TEST_SOURCE_ROOT = "src/test/java"
RESOURCES_ROOT = "src/main/resources"
