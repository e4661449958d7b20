"""
AWS Lambda handler for the Channel Partner Revenue Calculator API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import base64
import json
import logging
import os

from partner_engine import CalculatorSession, MetricsProcessor
from partner_engine.output import OutputBuilder
from partner_engine.session import update_from_dict

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO"))

# Environment (dev, staging, prod)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# Initialize once (reused across warm invocations)
processor = MetricsProcessor()
output_builder = OutputBuilder()

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - GET /defaults
    - POST /calculate
    - POST /update
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    elif path == "/defaults" and http_method == "GET":
        return handle_defaults()
    elif path == "/calculate" and http_method == "POST":
        return handle_body(event, handle_calculate)
    elif path == "/update" and http_method == "POST":
        return handle_body(event, handle_update)
    else:
        return _response(404, {"error": "Not found", "path": path})


def _response(status_code, payload):
    return {"statusCode": status_code, "headers": CORS_HEADERS, "body": json.dumps(payload)}


def handle_health():
    """Health check endpoint."""
    return _response(200, {"status": "healthy", "environment": ENVIRONMENT})


def handle_api_info():
    """API information endpoint."""
    return _response(
        200,
        {
            "status": "ok",
            "message": "Channel Partner Revenue Calculator API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "runtime": "AWS Lambda",
            "endpoints": {
                "defaults": "/defaults [GET]",
                "calculate": "/calculate [POST]",
                "update": "/update [POST]",
                "health": "/health [GET]",
            },
        },
    )


def handle_defaults():
    """Default snapshot (the reset state) with its metrics."""
    session = CalculatorSession()
    return _response(200, output_builder.build(session.inputs, session.metrics))


def handle_calculate(input_data):
    """Compute every derived metric for a (partial) input snapshot."""
    logger.info("Calculating snapshot")
    result = processor.process_from_dict(input_data)
    logger.info("Snapshot calculated successfully")
    return result


def handle_update(input_data):
    """Apply a list of operations to a snapshot."""
    return update_from_dict(input_data)


def handle_body(event, handler):
    """Parse the request body and run a POST handler, mapping errors to status codes."""
    try:
        body = event.get("body", "")
        if isinstance(body, str):
            if not body:
                return _response(400, {"error": "No input data provided", "status": "failed"})
            # Handle base64 encoded body (API Gateway)
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        return _response(200, handler(input_data))

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, KeyError, TypeError) as e:
        # Structural payload errors (bad tiers, unknown mode, unknown operation, ...)
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})

    except Exception as e:
        # Unexpected errors - log details but return generic message to avoid information disclosure
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return _response(500, {"error": "An unexpected error occurred during processing", "status": "failed"})
