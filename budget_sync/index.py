#!/usr/bin/env python3
"""
Budget Sync Lambda

This Lambda function propagates per-account budget thresholds from the
central budget table into each spoke account's Parameter Store.

Behavior:
---------
1. Receives a batch of DynamoDB stream records from the budget table.
2. Ignores every record that is not an INSERT or MODIFY.
3. Reads AccountId and the budget value ("BudgetValue", or the legacy
   "Budget Value ($)" column) from the record's new image.
4. Assumes SPOKE_ROLE_NAME in the account named by AccountId.
5. Overwrites BUDGET_THRESHOLD_PARAM in that account with the budget value.

A failing record is logged with its account id and never stops the rest of
the batch.

Returns:
--------
{"statusCode": 200, "body": "\"SSM Parameter updated\""} for every batch,
whatever happened to the individual records.
"""

import json

import boto3

from budget_sync.config import SyncConfig, get_logger
from budget_sync.outcomes import BatchReport, EventOutcome
from budget_sync.records import extract_budget_update, parse_record
from budget_sync.spoke import SpokeParameterWriter

logger = get_logger()

RESPONSE_STATUS_CODE = 200
RESPONSE_MESSAGE = "SSM Parameter updated"


def build_writer(config=None):
    """Build a SpokeParameterWriter from environment configuration."""
    config = config or SyncConfig.from_env()
    sts = boto3.client("sts", **config.client_kwargs())
    return SpokeParameterWriter(sts, config)


def process_record(raw, writer):
    """
    Process a single stream record.

    Args:
        raw (dict): Raw DynamoDB stream record
        writer (SpokeParameterWriter): Writes the value into the spoke account

    Returns:
        EventOutcome: written, skipped or failed. Never raises.
    """
    account_id = None
    event_id = None
    try:
        record = parse_record(raw)
        event_id = record.event_id

        if not record.is_processable:
            logger.info(f"Skipping {record.event_name} event {event_id}")
            return EventOutcome.skipped(
                event_id, reason=f"unsupported event {record.event_name}"
            )

        account_id = record.account_id
        update = extract_budget_update(record)
        writer.write(update.account_id, update.budget_value)
        return EventOutcome.written(event_id, update.account_id, update.budget_value)

    except Exception as error:
        logger.error(f"Error processing Account {account_id}: {str(error)}")
        return EventOutcome.failed(event_id, str(error), account_id=account_id)


def handle_batch(event, writer):
    """Process every record of the batch in delivery order."""
    report = BatchReport()
    for raw in event.get("Records", []):
        report.add(process_record(raw, writer))
    return report


def build_response():
    return {"statusCode": RESPONSE_STATUS_CODE, "body": json.dumps(RESPONSE_MESSAGE)}


def lambda_handler(event, context, writer=None):
    """
    AWS Lambda Handler

    Triggered by the budget table's DynamoDB stream.

    Parameters:
    -----------
    event : dict
        DynamoDB stream batch.
    context : LambdaContext
        Lambda context runtime information.
    writer : SpokeParameterWriter | None
        Writer to use; built from the environment when omitted.

    Returns:
    --------
    dict
        Fixed success response, also when records failed.
    """
    logger.info(f"Received event: {json.dumps(event)}")

    if writer is None:
        writer = build_writer()

    report = handle_batch(event, writer)
    report.log(logger)

    return build_response()
