"""Global test fixtures."""

import os

# Tests must not pick up a developer's config file
os.environ.pop("STATEPERMIT_CONFIG_FILE", None)
os.environ.pop("STATEPERMIT_LOG_FILE", None)
