"""DynamoDB stream record parsing for the budget table."""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger("LambdaLogger")

PROCESSED_EVENT_NAMES = ("INSERT", "MODIFY")

ACCOUNT_ID_KEY = "AccountId"
BUDGET_VALUE_KEY = "BudgetValue"
# Legacy display-style column name
LEGACY_BUDGET_VALUE_KEY = "Budget Value ($)"


class BudgetRecordError(Exception):
    """Raised when a stream record cannot be turned into a budget update."""


class MissingAttributeError(BudgetRecordError, KeyError):
    def __str__(self):
        return str(self.args[0]) if self.args else ""


class MissingBudgetValueError(MissingAttributeError):
    pass


class InvalidBudgetValueError(BudgetRecordError, ValueError):
    pass


@dataclass(frozen=True)
class StreamRecord:
    event_id: Optional[str]
    event_name: Optional[str]
    new_image: Optional[dict]

    @property
    def is_processable(self):
        return self.event_name in PROCESSED_EVENT_NAMES

    @property
    def account_id(self):
        """Best-effort account id, used for log lines before validation."""
        if not self.new_image:
            return None
        attribute = self.new_image.get(ACCOUNT_ID_KEY)
        if not isinstance(attribute, dict):
            return None
        return attribute.get("S")


@dataclass(frozen=True)
class BudgetUpdate:
    account_id: str
    budget_value: str


def parse_record(raw):
    """
    Build a StreamRecord from a raw DynamoDB stream record.

    Args:
        raw (dict): One entry of the Lambda event's "Records" list

    Returns:
        StreamRecord: The event id, event name and new image (if any)
    """
    return StreamRecord(
        event_id=raw.get("eventID"),
        event_name=raw.get("eventName"),
        new_image=raw.get("dynamodb", {}).get("NewImage"),
    )


def _number_attribute(image, key):
    attribute = image.get(key)
    if not isinstance(attribute, dict):
        return None
    return attribute.get("N")


def is_valid_budget_value(value):
    return isinstance(value, str) and value.isascii() and value.isdigit()


def extract_budget_update(record):
    """
    Extract and validate the account id and budget value of a record.

    The budget value is read from "BudgetValue" first and from the legacy
    "Budget Value ($)" column when the first one is absent or empty.

    Args:
        record (StreamRecord): A parsed INSERT or MODIFY record

    Raises:
        MissingAttributeError: The new image or the account id is missing
        MissingBudgetValueError: Neither budget value key is present
        InvalidBudgetValueError: The budget value is not a non-negative integer

    Returns:
        BudgetUpdate: The account id and the budget value as a string
    """
    image = record.new_image
    if not image:
        raise MissingAttributeError("NewImage not found in stream record!")

    logger.debug(f"New Image: {image}")
    logger.debug(f"Detected Keys: {list(image.keys())}")

    account_id = record.account_id
    if not account_id:
        raise MissingAttributeError(f"{ACCOUNT_ID_KEY} not found in event!")

    budget_value = (
        _number_attribute(image, BUDGET_VALUE_KEY)
        or _number_attribute(image, LEGACY_BUDGET_VALUE_KEY)
    )
    if not budget_value:
        raise MissingBudgetValueError("Budget amount key not found in event!")

    if not is_valid_budget_value(budget_value):
        raise InvalidBudgetValueError(
            f"Budget amount is not a valid numeric value: {budget_value!r}"
        )

    logger.debug(f"Budget Amount: {budget_value}")
    return BudgetUpdate(account_id=account_id, budget_value=budget_value)
