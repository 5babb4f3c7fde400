"""Redis adapter – cache resource."""
from srvkit.adapters.redis.resource import RedisResource

__all__ = ["RedisResource"]
