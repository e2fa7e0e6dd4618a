import logging

from flask import Flask, jsonify, render_template, request

import config
from errors import AnalyzerError
from pipeline import select_pipeline, validate_request

logger = logging.getLogger(__name__)

app = Flask(__name__)
config.setup_logging()


@app.route("/")
def index():
    return render_template("index.html")


@app.route("/analyze", methods=["POST"])
def analyze():
    try:
        user_name, channel_name = validate_request(request.get_json(silent=True))
        report = select_pipeline().run(user_name, channel_name)
    except AnalyzerError as e:
        return jsonify({"error": str(e)}), e.status_code
    except Exception as e:
        logger.exception("Unexpected error during analysis")
        return jsonify({
            "error": "An unexpected error occurred during analysis",
            "details": str(e),
        }), 500

    logger.info("Sending response with %d videos analyzed", report.total_videos_found)
    return jsonify(report.to_payload())


if __name__ == "__main__":
    if not config.has_credentials():
        logger.info("Running in mock mode - add API keys to .env for full functionality")
    app.run(debug=True, port=config.PORT)
