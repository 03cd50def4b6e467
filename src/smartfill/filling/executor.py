"""Sequential fill loop with per-field retry accounting."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.config import EngineConfig
from ..core.errors import (
    ElementGoneError,
    FieldFillError,
    InvalidArgumentError,
    UnsupportedFieldTypeError,
    ValueMissingError,
    WriteRejectedError,
)
from ..core.models import FieldFillResult, FieldState, FieldType, FieldValue, FillOutcome, FormField, ValueBag
from ..core.scheduler import Scheduler, default_scheduler
from ..detection.classifier import field_type
from ..detection.filter import is_fillable
from .actions import write_checkbox, write_radio, write_select, write_text
from .mapper import resolve_value

logger = logging.getLogger(__name__)

NO_FIELDS_ERROR = "No fillable fields found"


class FillExecutor:
    def __init__(self, *, config: Optional[EngineConfig] = None, scheduler: Optional[Scheduler] = None) -> None:
        self.config = config or EngineConfig()
        self.scheduler = scheduler or default_scheduler

    async def fill(self, fields: Iterable[FormField], values: ValueBag) -> FillOutcome:
        if fields is None:
            raise InvalidArgumentError("fields must not be None")
        if values is None:
            raise InvalidArgumentError("values must not be None")

        fields = list(fields)
        outcome = FillOutcome()
        if not fields:
            outcome.errors.append(NO_FIELDS_ERROR)
            return outcome

        for item in fields:
            await self.scheduler.sleep(self.config.interaction_delay)
            result = await self.fill_field(item, values)
            outcome.results.append(result)
            if result.succeeded:
                outcome.filled += 1
            else:
                outcome.errors.append(result.error)

        logger.info("Filled %d of %d field(s)", outcome.filled, len(fields))
        return outcome

    async def fill_field(self, item: FormField, values: ValueBag) -> FieldFillResult:
        result = FieldFillResult(name=item.name)

        if item.type is FieldType.FILE:
            return self._fail(result, UnsupportedFieldTypeError(item.name, "file inputs cannot be filled"))

        value = resolve_value(item.name, values)
        if value is None:
            return self._fail(result, ValueMissingError(item.name, "no value provided"))

        budget = max(1, self.config.max_retries)
        last_error: Optional[FieldFillError] = None
        for attempt in range(1, budget + 1):
            result.state = FieldState.ATTEMPTING
            result.attempts = attempt
            try:
                self._attempt(item, value)
            except FieldFillError as exc:
                last_error = exc
                if not exc.retryable:
                    break
                if attempt < budget:
                    result.state = FieldState.RETRYING
                    logger.debug("Retrying %s after attempt %d: %s", item.name, attempt, exc.reason)
                    await self.scheduler.sleep(self.config.retry_delay)
                continue
            result.state = FieldState.DONE
            return result

        logger.warning("Giving up on %s after %d attempt(s)", item.name, result.attempts)
        return self._fail(result, last_error)

    def _attempt(self, item: FormField, value: FieldValue) -> None:
        element = item.element.resolve()
        page = item.element.page
        if element is None or page is None:
            raise ElementGoneError(item.name, "element is no longer attached to the page")

        try:
            if not is_fillable(page, element):
                raise WriteRejectedError(item.name, "element is no longer fillable")

            kind = field_type(element)
            if kind is not item.type:
                raise WriteRejectedError(
                    item.name, f"field type changed from {item.type.value} to {kind.value}"
                )

            if kind is FieldType.SELECT:
                write_select(page, element, value, item.name)
            elif kind is FieldType.RADIO:
                write_radio(page, element, value, item.name)
            elif kind is FieldType.CHECKBOX:
                write_checkbox(page, element, value, item.name)
            elif kind.is_text_like:
                write_text(page, element, kind, value, item.name)
            else:
                raise UnsupportedFieldTypeError(item.name, f"cannot write {kind.value} fields")
        except FieldFillError:
            raise
        except Exception as exc:
            raise WriteRejectedError(item.name, str(exc) or exc.__class__.__name__) from exc

    @staticmethod
    def _fail(result: FieldFillResult, error: FieldFillError) -> FieldFillResult:
        result.state = FieldState.FAILED
        result.error = f"Failed to fill {error.field_name}: {error.reason}"
        return result
