import threading
from datetime import datetime
from typing import Dict, Any, List
from core.logger import get_logger

logger = get_logger("brand_store")

class BrandStore:
    """In-memory brand configuration store (process lifetime only)"""

    def __init__(self):
        self.configs: Dict[int, Dict[str, Any]] = {}
        self.next_id = 1
        self.lock = threading.Lock()

    def create(self, brand_config: Dict[str, Any], source: str = "manual") -> Dict[str, Any]:
        now = datetime.now().isoformat()
        with self.lock:
            config_id = self.next_id
            self.next_id += 1
            config = {
                "id": config_id,
                "brand_config": brand_config,
                "source": source,
                "created_at": now,
                "updated_at": now,
            }
            self.configs[config_id] = config
        logger.info(f"Created brand config {config_id} (source: {source})")
        return config

    def get(self, config_id: int) -> Dict[str, Any]:
        with self.lock:
            if config_id not in self.configs:
                raise KeyError(config_id)
            return self.configs[config_id]

    def update(self, config_id: int, brand_config: Dict[str, Any]) -> Dict[str, Any]:
        with self.lock:
            if config_id not in self.configs:
                raise KeyError(config_id)
            config = {
                **self.configs[config_id],
                "brand_config": brand_config,
                "updated_at": datetime.now().isoformat(),
            }
            self.configs[config_id] = config
        logger.info(f"Updated brand config {config_id}")
        return config

    def delete(self, config_id: int):
        with self.lock:
            if config_id not in self.configs:
                raise KeyError(config_id)
            del self.configs[config_id]
        logger.info(f"Deleted brand config {config_id}")

    def list(self) -> List[Dict[str, Any]]:
        with self.lock:
            return list(self.configs.values())

brand_store = BrandStore()
