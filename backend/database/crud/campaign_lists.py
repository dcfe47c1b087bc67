"""
CRUD operations for campaign ID lists (STOPCAMPAIGN, RERUNCAMPAIGN)
"""
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session

from database.models import CampaignListItem


def get_campaign_list(db: Session, list_name: str) -> List[Optional[str]]:
    """Cell values of a list in position order (empty cells included)"""
    items = (
        db.query(CampaignListItem)
        .filter(CampaignListItem.list_name == list_name)
        .order_by(CampaignListItem.position)
        .all()
    )
    return [item.value for item in items]


def replace_campaign_list(db: Session, list_name: str, values: Iterable) -> int:
    """Replace the whole list with new cell values"""
    db.query(CampaignListItem).filter(
        CampaignListItem.list_name == list_name
    ).delete(synchronize_session=False)

    count = 0
    for position, value in enumerate(values, start=1):
        db.add(CampaignListItem(
            list_name=list_name,
            position=position,
            value=None if value is None else str(value),
        ))
        count += 1

    db.commit()
    return count
