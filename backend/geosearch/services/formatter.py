"""
Builds the response envelopes the map client parses.

Both shapes carry an allow-all CORS header and a JSON content type, error
paths included, so a browser caller can always read the body.
"""
import json

from fastapi.responses import Response

JSON_MEDIA_TYPE = "application/json"
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def success_response(features_payload: str) -> Response:
    """
    Wraps the aggregated feature array, already JSON, without re-encoding it.
    """
    body = '{"status":"ok","features":' + features_payload + "}"
    return Response(content=body, status_code=200, media_type=JSON_MEDIA_TYPE, headers=dict(CORS_HEADERS))


def error_response(message: str, status_code: int) -> Response:
    body = json.dumps({"status": "error", "error": message}, separators=(",", ":"))
    return Response(content=body, status_code=status_code, media_type=JSON_MEDIA_TYPE, headers=dict(CORS_HEADERS))
