from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from thingmeta.catalog.registry import ChannelTypeRegistry, register_channel_types
from thingmeta.core.exceptions import DefinitionLoadError, UnresolvedTypeHandler, UnresolvedTypePolicy
from thingmeta.core.logger import get_logger, push_load_id, reset_load_id
from thingmeta.models.channel_definition import ChannelDefinition
from thingmeta.models.channel_type import ChannelType
from thingmeta.models.definitions_document import DefinitionsDocument, ThingTypeConfig
from thingmeta.models.thing_type import ThingType

logger = get_logger(__name__)


@dataclass
class LoadResult:
    channel_types: List[ChannelType] = field(default_factory=list)
    thing_types: List[ThingType] = field(default_factory=list)

    def get_thing_type(self, uid: str) -> Optional[ThingType]:
        for thing_type in self.thing_types:
            if thing_type.uid == uid:
                return thing_type
        return None


def read_definitions_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a definitions document from a JSON or YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is not .json, .yaml or .yml
    """
    definitions_file = Path(path)
    if not definitions_file.exists():
        raise FileNotFoundError(f"Definitions file not found: {path}")

    with open(definitions_file, "r") as f:
        if definitions_file.suffix == ".json":
            document = json.load(f)
        elif definitions_file.suffix in (".yaml", ".yml"):
            document = yaml.safe_load(f)
        else:
            raise ValueError(
                f"Unsupported definitions format: {definitions_file.suffix}. "
                "Use .json or .yaml"
            )
    return document or {}


def _build_thing_type(
    cfg: ThingTypeConfig,
    local_types: Dict[str, ChannelType],
    handler: UnresolvedTypeHandler,
) -> ThingType:
    definitions: List[ChannelDefinition] = []
    for channel_cfg in cfg.channels:
        channel_type = local_types.get(channel_cfg.type) or ChannelTypeRegistry.try_get(channel_cfg.type)
        if channel_type is None:
            handler.handle(
                reason="Unknown channel type",
                details={"thing_type": cfg.uid, "channel": channel_cfg.id, "type": channel_cfg.type},
            )
            continue

        try:
            definitions.append(ChannelDefinition.create(channel_cfg.id, channel_type, channel_cfg.properties))
        except ValidationError as exc:
            raise DefinitionLoadError(
                reason="Invalid channel definition",
                details={"thing_type": cfg.uid, "channel": channel_cfg.id, "errors": exc.errors()},
            ) from exc

    try:
        return ThingType(
            uid=cfg.uid,
            label=cfg.label,
            description=cfg.description,
            supported_bridge_type_uids=tuple(cfg.supported_bridge_type_uids),
            channel_definitions=tuple(definitions),
            properties=cfg.properties,
        )
    except ValidationError as exc:
        raise DefinitionLoadError(
            reason="Invalid thing type",
            details={"thing_type": cfg.uid, "errors": exc.errors()},
        ) from exc


def load_definitions(
    document: Union[Dict[str, Any], DefinitionsDocument],
    *,
    overwrite: bool = False,
    unresolved_policy: UnresolvedTypePolicy = UnresolvedTypePolicy.FAIL,
    load_id: Optional[str] = None,
) -> LoadResult:
    """
    Build the document's thing types and register its channel types.

    Channel type references are resolved against the document's own channel
    types first, then ``ChannelTypeRegistry``, so a document may refer to
    channel types registered by an earlier load. Nothing is registered unless
    the whole document loads.

    Args:
        document: Definitions as a dict or an already validated DefinitionsDocument
        overwrite: Replace channel types already registered under the same uid
        unresolved_policy: What to do with channels whose type uid is unknown
        load_id: Correlation id for log records (generated if omitted)

    Raises:
        DefinitionLoadError: If the document or any definition in it is invalid
    """
    token = push_load_id(load_id or str(uuid.uuid4()))
    try:
        if isinstance(document, DefinitionsDocument):
            doc = document
        else:
            try:
                doc = DefinitionsDocument.model_validate(document)
            except ValidationError as exc:
                raise DefinitionLoadError(
                    reason="Invalid definitions document",
                    details={"errors": exc.errors()},
                ) from exc

        local_types: Dict[str, ChannelType] = {}
        for channel_type in doc.channel_types:
            if channel_type.uid in local_types:
                raise DefinitionLoadError(
                    reason="Duplicate channel type in document",
                    details={"uid": channel_type.uid},
                )
            if not overwrite and ChannelTypeRegistry.try_get(channel_type.uid) is not None:
                raise DefinitionLoadError(
                    reason="Channel type already registered",
                    details={"uid": channel_type.uid},
                )
            local_types[channel_type.uid] = channel_type

        handler = UnresolvedTypeHandler(policy=unresolved_policy, logger=logger)
        result = LoadResult(channel_types=list(doc.channel_types))
        for thing_type_cfg in doc.thing_types:
            thing_type = _build_thing_type(thing_type_cfg, local_types, handler)
            logger.debug(f"Built thing type {thing_type.uid} with channels {list(thing_type.channel_ids)}")
            result.thing_types.append(thing_type)

        register_channel_types(doc.channel_types, overwrite=overwrite)

        logger.info(
            f"Loaded {len(result.channel_types)} channel type(s) and "
            f"{len(result.thing_types)} thing type(s)"
        )
        return result
    finally:
        reset_load_id(token)


def load_definitions_file(path: Union[str, Path], **kwargs: Any) -> LoadResult:
    """Read a JSON/YAML definitions file and pass it to ``load_definitions``."""
    document = read_definitions_file(path)
    logger.info(f"Loaded definitions from {path}")
    return load_definitions(document, **kwargs)
