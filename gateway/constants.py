# gateway/constants.py
# Shared constants for saved UI views

import string

# Owner recorded on shared/default views not owned by any individual
SYSTEM_OWNER: str = "system"

# View ids: 15 characters over [0-9A-Za-z]
VIEW_ID_ALPHABET: str = string.digits + string.ascii_uppercase + string.ascii_lowercase
VIEW_ID_LENGTH: int = 15

# Schemas created at startup; "ui" holds views, "merlin" belongs to the planning service
UI_SCHEMA: str = "ui"
MERLIN_SCHEMA: str = "merlin"
