"""
Static service registry. Order here is the order of every ScanReport.
"""

from typing import List, Optional

from core.config import Settings, settings
from core.models import ServiceSpec
from probers.mongodb import MongoDBDriver
from probers.redis_kv import RedisDriver


def default_services(cfg: Optional[Settings] = None) -> List[ServiceSpec]:
    cfg = cfg or settings
    return [
        ServiceSpec(
            name="MongoDB",
            port=cfg.mongodb_port,
            driver=MongoDBDriver(
                timeout_s=cfg.handshake_timeout_s,
                database=cfg.mongodb_database,
                notice_enabled=cfg.mongodb_notice_enabled,
                notice_collection=cfg.mongodb_notice_collection,
                notice_message=cfg.mongodb_notice_message,
            ),
        ),
        ServiceSpec(
            name="Redis",
            port=cfg.redis_port,
            driver=RedisDriver(timeout_s=cfg.handshake_timeout_s),
        ),
    ]
