"""
Google API scopes used by the server.
"""

DOCS_READONLY_SCOPE = "https://www.googleapis.com/auth/documents.readonly"
DOCS_WRITE_SCOPE = "https://www.googleapis.com/auth/documents"
DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"

# Scope groups referenced by require_google_service
SCOPE_GROUPS = {
    "docs_read": DOCS_READONLY_SCOPE,
    "docs_write": DOCS_WRITE_SCOPE,
    "drive_file": DRIVE_FILE_SCOPE,
}

# Requested during the interactive authorization flow
SCOPES = [
    DOCS_WRITE_SCOPE,
    DRIVE_FILE_SCOPE,
]


def get_scope_for_group(group: str) -> str:
    try:
        return SCOPE_GROUPS[group]
    except KeyError:
        raise ValueError(
            f"Unknown scope group '{group}'. Valid groups: {', '.join(SCOPE_GROUPS)}"
        )
