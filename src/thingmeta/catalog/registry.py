from __future__ import annotations

from typing import ClassVar, Dict, Iterable, List, Optional

from thingmeta.core.logger import get_logger
from thingmeta.models.channel_type import ChannelType

logger = get_logger(__name__)


class ChannelTypeRegistryError(RuntimeError):
    pass


class ChannelTypeRegistry:
    """Process-wide catalog of channel types keyed by uid."""

    _registry: ClassVar[Dict[str, ChannelType]] = {}

    @classmethod
    def register(cls, channel_type: ChannelType, *, overwrite: bool = False) -> None:
        uid = channel_type.uid
        if not overwrite and uid in cls._registry:
            existing = cls._registry[uid]
            raise ChannelTypeRegistryError(
                f"Channel type already registered for uid={uid!r}: {existing!r}"
            )
        cls._registry[uid] = channel_type
        logger.debug(f"Registered channel type {uid}")

    @classmethod
    def get(cls, uid: str) -> ChannelType:
        try:
            return cls._registry[uid]
        except KeyError as exc:
            raise ChannelTypeRegistryError(f"No channel type registered for uid={uid!r}") from exc

    @classmethod
    def try_get(cls, uid: str) -> Optional[ChannelType]:
        return cls._registry.get(uid)

    @classmethod
    def all(cls) -> List[ChannelType]:
        return [cls._registry[uid] for uid in sorted(cls._registry)]

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_channel_types(channel_types: Iterable[ChannelType], *, overwrite: bool = False) -> None:
    for channel_type in channel_types:
        ChannelTypeRegistry.register(channel_type, overwrite=overwrite)
