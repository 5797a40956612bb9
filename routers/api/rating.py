from . import api_blueprint
from services import rating_service
from utils import api_handler, success_response

# ============================================================================
# Title Rating API Endpoints
# ============================================================================

@api_blueprint.route('/titles/<title_id>/rating', methods=['GET'])
@api_handler()
async def api_title_rating(title_id):
    """Nuanced rating and audience estimate of a title."""
    rating = await rating_service.get_title_rating(title_id)
    return success_response({"rating": rating})
