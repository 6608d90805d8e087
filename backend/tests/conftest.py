import os
import tempfile

# Keep generated decks out of the source tree
os.environ.setdefault("TEMP_DIR", tempfile.mkdtemp(prefix="brand_to_deck_"))
