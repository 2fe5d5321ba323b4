from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

from newsticker.logging_config import get_logger
from newsticker.models import DEFAULT_SERVICE
from newsticker.news_source import NewsSourceParser, filter_headlines
from newsticker.web_interface.error_handler import create_error_response, handle_errors
from newsticker.web_interface.errors import ErrorCode

logger = get_logger(__name__)

MAX_QUERY_LENGTH = 200

api_v1 = Blueprint('api_v1', __name__)


def _get_news_parser() -> NewsSourceParser:
    return NewsSourceParser(current_app.config['NEWS_DIR'])


@api_v1.route('/news', methods=['GET'])
@handle_errors(default_error_code=ErrorCode.NEWS_LOAD_FAILED)
def get_news():
    """Headlines for a service as a JSON array, optionally filtered by ``q``."""
    service = request.args.get('service') or DEFAULT_SERVICE
    query = request.args.get('q')

    if query and len(query) > MAX_QUERY_LENGTH:
        return create_error_response(
            ErrorCode.INVALID_INPUT,
            f"Query must be at most {MAX_QUERY_LENGTH} characters",
            context={'length': len(query)},
            status_code=400
        )

    headlines = _get_news_parser().load_for_service(service)
    headlines = filter_headlines(headlines, query)
    logger.debug("Serving %d %s headlines (q=%r)", len(headlines), service, query)
    return jsonify([headline.to_dict() for headline in headlines])


@api_v1.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok', 'timestamp': datetime.now(timezone.utc).isoformat()})
