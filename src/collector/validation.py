"""Validation wrapper between the assembler and the outgoing batch.

Validates record dicts against Pydantic models and logs failures, so
that nothing malformed reaches the remote collector.

Usage::

    from collector.validation import validate_record
    from collector.models import MatchRecordModel

    validated = validate_record(record, MatchRecordModel, {"file": filename})
    if validated is not None:
        batch.append(validated)
"""

import logging
import warnings

from pydantic import ValidationError

logger = logging.getLogger(__name__)


def validate_record(
    data: dict,
    model_cls: type,
    context: dict,
) -> dict | None:
    """Validate a dict against a Pydantic model.

    Soft warnings emitted by model validators are logged and do not
    reject the record.

    Args:
        data: Dict of field values to validate.
        model_cls: Pydantic model class (e.g. MatchRecordModel).
        context: Dict with a ``file`` key naming the source file, used
            for log messages.

    Returns:
        The validated dict (via ``model.model_dump()``) on success, or
        ``None`` if validation failed.
    """
    source = context.get("file")

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            model = model_cls.model_validate(data)

        for w in caught:
            logger.warning(
                "Validation warning for %s (%s): %s",
                model_cls.__name__,
                source,
                w.message,
            )

        return model.model_dump()

    except ValidationError as e:
        logger.error(
            "Validation failed for %s (%s): %s",
            model_cls.__name__,
            source,
            e,
        )
        return None
