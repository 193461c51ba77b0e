"""
A small JSON Patch interpreter for flat projections.

``apply_patch`` runs the operations of a patch document one after the
other against a plain dict whose keys are the wire names of a pydantic
model.  Supported operations are those of RFC 6902:

* ``add`` / ``replace`` – set the field to ``value``;
* ``remove`` – reset the field to its default;
* ``copy`` / ``move`` – take the value of the field named by ``from``
  (``move`` resets the source field);
* ``test`` – compare the field with ``value``.

Paths are single‑segment JSON pointers such as ``/login``.  Segment
names are matched case‑insensitively against both the attribute names
and the aliases of the model, so ``/firstName``, ``/first_name`` and
``/FirstName`` all address the same field.

Structural problems never raise.  An invalid operation is skipped and
its message is recorded in the returned ``ValidationError`` under the
field it targets (or under its raw path when the path does not resolve),
so the caller can merge it with the model validation errors.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import ValidationError
from ..schemas.patch import PatchOperation


logger = logging.getLogger(__name__)

DOCUMENT_KEY = "patch"


class PatchError(Exception):
    """An operation cannot be applied to the projection."""

    def __init__(self, message: str, field: str = DOCUMENT_KEY) -> None:
        super().__init__(message)
        self.field = field


def field_lookup(model: Type[BaseModel]) -> Dict[str, str]:
    """Map lower‑cased attribute names and aliases to the wire name."""
    lookup: Dict[str, str] = {}
    for name, info in model.model_fields.items():
        alias = info.alias or name
        lookup[name.lower()] = alias
        lookup[alias.lower()] = alias
    return lookup


def projection_defaults(model: Type[BaseModel]) -> Dict[str, Any]:
    """Return the default projection of ``model`` keyed by wire name.

    The defaults are not validated, so a model whose defaults are not
    valid on their own can still seed a projection.
    """
    return model.model_construct().model_dump(by_alias=True)


def _resolve(path: str, lookup: Mapping[str, str]) -> str:
    if not path.startswith("/"):
        raise PatchError(f"The path '{path}' is not a valid JSON pointer.", path or DOCUMENT_KEY)
    segment = path[1:]
    if "/" in segment:
        raise PatchError(f"The target location specified by path '{path}' was not found.", path)
    segment = segment.replace("~1", "/").replace("~0", "~")
    try:
        return lookup[segment.lower()]
    except KeyError:
        raise PatchError(
            f"The target location specified by path segment '{segment}' was not found.", path
        ) from None


def _apply(
    operation: PatchOperation,
    projection: Dict[str, Any],
    defaults: Mapping[str, Any],
    lookup: Mapping[str, str],
) -> None:
    target = _resolve(operation.path, lookup)

    if operation.op in ("add", "replace"):
        if not operation.has_value:
            raise PatchError(f"The 'value' member is required for '{operation.op}' operations.", target)
        projection[target] = operation.value
    elif operation.op == "remove":
        projection[target] = defaults[target]
    elif operation.op in ("copy", "move"):
        if operation.from_ is None:
            raise PatchError(f"The 'from' member is required for '{operation.op}' operations.", target)
        source = _resolve(operation.from_, lookup)
        value = projection[source]
        if operation.op == "move":
            projection[source] = defaults[source]
        projection[target] = value
    elif operation.op == "test":
        if projection[target] != operation.value:
            raise PatchError(
                f"The current value '{projection[target]}' at path '{operation.path}' "
                f"is not equal to the test value '{operation.value}'.",
                target,
            )


def apply_patch(
    document: Iterable[Any],
    projection: Dict[str, Any],
    model: Type[BaseModel],
) -> ValidationError:
    """Apply ``document`` to ``projection`` in place.

    Returns the structural errors collected on the way; its ``errors``
    map is empty when every operation applied.
    """
    lookup = field_lookup(model)
    defaults = projection_defaults(model)
    errors = ValidationError()
    for index, raw in enumerate(document):
        try:
            operation = PatchOperation.model_validate(raw)
        except PydanticValidationError as exc:
            details = "; ".join(error["msg"] for error in exc.errors())
            errors.add(DOCUMENT_KEY, f"Operation {index} is malformed: {details}")
            continue
        try:
            _apply(operation, projection, defaults, lookup)
        except PatchError as exc:
            logger.debug("Patch operation %s rejected: %s", index, exc)
            errors.add(exc.field, str(exc))
    return errors
