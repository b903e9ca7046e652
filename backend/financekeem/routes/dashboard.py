"""
Admin dashboard stats and data reset
"""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from ..services.bookings import BookingService
from ..storage import Store, get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["dashboard"])

RECENT_LEADS_LIMIT = 5


@router.get("/dashboard")
async def get_dashboard(store: Store = Depends(get_store)):
    """Totals for the admin home page"""
    leads = store.get("leads")
    now = datetime.now()
    this_month = [
        lead for lead in leads
        if lead["created_at"].year == now.year and lead["created_at"].month == now.month
    ]

    return {
        "total_leads": len(leads),
        "quiz_responses": len(store.get("quiz_responses")),
        "upcoming_bookings": len(BookingService(store).upcoming()),
        "leads_this_month": len(this_month),
        "recent_leads": [
            {
                "id": lead["id"],
                "name": lead.get("name"),
                "email": lead.get("email"),
                "status": lead["status"],
                "source": lead.get("source"),
                "created_at": lead["created_at"].isoformat(),
            }
            for lead in leads[:RECENT_LEADS_LIMIT]
        ],
    }


@router.delete("/admin/data")
async def clear_data(store: Store = Depends(get_store)):
    """Remove every record from every collection"""
    store.clear()
    logger.warning("All data cleared")
    return {"success": True}
