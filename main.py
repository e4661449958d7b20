from flask import Flask, request, jsonify
from flask_cors import CORS
from partner_engine import CalculatorSession, MetricsProcessor
from partner_engine.output import OutputBuilder
from partner_engine.session import update_from_dict
import os
import logging

# Configure logging
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (the calculator front end is served from another origin)
CORS(app)

processor = MetricsProcessor()
output_builder = OutputBuilder()


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Channel Partner Revenue Calculator API",
        "version": "1.0",
        "endpoints": {
            "defaults": "/defaults [GET]",
            "calculate": "/calculate [POST]",
            "update": "/update [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/defaults", methods=["GET"])
def defaults():
    """Default snapshot (the reset state) with its metrics"""
    session = CalculatorSession()
    return jsonify(output_builder.build(session.inputs, session.metrics)), 200


@app.route("/calculate", methods=["POST"])
def calculate():
    """
    Compute every derived metric for a (partial) input snapshot
    """
    try:
        input_data = request.get_json(force=True, silent=True)

        if input_data is None:
            return jsonify({
                "error": "No valid JSON input provided",
                "status": "failed"
            }), 400

        logger.info("Calculating snapshot")

        result = processor.process_from_dict(input_data)

        logger.info("Snapshot calculated successfully")

        return jsonify(result), 200

    except ValueError as e:
        # Structural payload errors
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/update", methods=["POST"])
def update():
    """
    Apply a list of operations to a snapshot and return the new snapshot and metrics
    """
    try:
        input_data = request.get_json(force=True, silent=True)

        if input_data is None:
            return jsonify({
                "error": "No valid JSON input provided",
                "status": "failed"
            }), 400

        result = update_from_dict(input_data)

        return jsonify(result), 200

    except (ValueError, TypeError) as e:
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
