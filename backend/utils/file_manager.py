import os
import re
import time
import uuid
import threading
from datetime import datetime
from io import BytesIO
from typing import Optional
from core.config import settings
from core.logger import get_logger

logger = get_logger("file_manager")

TMP_DIR = settings.temp_dir or os.path.join(os.path.dirname(__file__), '..', 'tmp')
GENERATED_DIR = os.path.join(TMP_DIR, 'generated')

os.makedirs(GENERATED_DIR, exist_ok=True)

SAFE_NAME_RE = re.compile(r'^[\w\-]+\.pptx$')

# Delete a file after a delay (seconds)
def cleanup_file(path: str, delay: int = None):
    delay = settings.temp_file_lifetime if delay is None else delay

    def _delete():
        time.sleep(delay)
        remove_file(path)
    threading.Thread(target=_delete, daemon=True).start()

def remove_file(path: str):
    try:
        os.remove(path)
        logger.debug(f"Removed temp file {path}")
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temp file {path}: {e}")

def sanitize_title(title: str, max_length: int = 30) -> str:
    clean = re.sub(r'[^a-zA-Z0-9]', '_', title or '')[:max_length]
    return clean or "presentation"

def create_generated_filename(title: str) -> str:
    """Unique filename: <timestamp>_<id>_<title>.pptx"""
    timestamp = datetime.now().strftime('%Y-%m-%dT%H-%M-%S')
    unique_id = uuid.uuid4().hex[:8]
    return f"{timestamp}_{unique_id}_{sanitize_title(title)}.pptx"

def save_generated(stream: BytesIO, title: str) -> str:
    """Write a generated deck to the temp dir and schedule its removal; returns the filename"""
    filename = create_generated_filename(title)
    path = os.path.join(GENERATED_DIR, filename)
    with open(path, 'wb') as f:
        f.write(stream.getvalue())
    cleanup_file(path)
    logger.info(f"Saved generated deck {filename}")
    return filename

def get_download_path(filename: str) -> Optional[str]:
    """Path of a generated file, or None for unknown or unsafe names"""
    if not SAFE_NAME_RE.match(filename or ''):
        return None
    path = os.path.join(GENERATED_DIR, filename)
    return path if os.path.isfile(path) else None

def get_file_info(original_name: str, content_type: str, size: int) -> dict:
    return {
        "original_name": original_name,
        "mimetype": content_type,
        "size": size,
        "size_in_mb": f"{size / (1024 * 1024):.2f} MB",
        "extension": os.path.splitext(original_name or '')[1].lower(),
    }
