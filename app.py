import logging

from flask import Flask, jsonify, request

from api_description import fetch_api_description
from curl_auth import for_method
from curl_command import build_curl_commands, build_document_commands, load_config

logger = logging.getLogger(__name__)

app = Flask(__name__)

config = load_config()
app.config["BASE_URI"] = config.get("base_uri")
app.config["REQUEST_TIMEOUT"] = config.get("request_timeout", 10)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


@app.route("/")
def index():
    return jsonify(
        {
            "service": "curl-incantation",
            "endpoints": ["/api/fragments", "/api/commands", "/api/describe"],
        }
    )


@app.route("/api/fragments", methods=["POST"])
def fragments():
    """Return the auth fragments for a single method."""
    data = _json_body()
    if data is None or not isinstance(data.get("method"), dict):
        return _error("Request body must be a JSON object with a 'method' object.")

    result = for_method(data["method"])
    return jsonify({"fragments": [fragment.to_dict() for fragment in result]})


@app.route("/api/commands", methods=["POST"])
def commands():
    """Return complete curl commands for a single method."""
    data = _json_body()
    if data is None or not isinstance(data.get("method"), dict):
        return _error("Request body must be a JSON object with a 'method' object.")

    url = data.get("url", "")
    if not isinstance(url, str) or not url.strip():
        return _error("Provide the request 'url'.")

    return jsonify({"commands": build_curl_commands(data["method"], url.strip())})


@app.route("/api/describe", methods=["POST"])
def describe():
    """Return curl commands for every method of an API description."""
    data = _json_body()
    if data is None:
        return _error("Request body must be a JSON object.")

    document = data.get("document")
    url = (data.get("url") or "").strip()
    if document is None and not url:
        return _error("Provide an API description 'document' or its 'url'.")

    if document is None:
        document, error = fetch_api_description(url, timeout=app.config["REQUEST_TIMEOUT"])
        if document is None:
            return _error(error or "Unable to fetch API description.", 502)

    if not isinstance(document, dict):
        return _error("API description must be a mapping.")

    base_uri = data.get("baseUri") or app.config["BASE_URI"]
    logger.info("Building commands for %s", url or "inline document")
    return jsonify({"commands": build_document_commands(document, base_uri)})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True)  # nosec B201 - debug mode only for local development
