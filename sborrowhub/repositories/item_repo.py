from sqlalchemy import case, or_

from sborrowhub.models.item import Item
from sborrowhub.extensions import db


class ItemRepo:
    @staticmethod
    def list_all(category=None, search=None, status=None):
        q = Item.query
        if category:
            q = q.filter(Item.category == category)
        if status:
            q = q.filter(Item.status == status)
        if search:
            like = f"%{search}%"
            q = q.filter(or_(Item.name.ilike(like), Item.description.ilike(like)))
        return q.order_by(Item.id.desc()).all()

    @staticmethod
    def get(item_id: int):
        return db.session.get(Item, item_id)

    @staticmethod
    def create(item: Item):
        db.session.add(item)
        db.session.commit()
        return item

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(item: Item):
        db.session.delete(item)
        db.session.commit()

    @staticmethod
    def try_reserve(item_id: int, qty: int) -> bool:
        """Conditional decrement: only succeeds while `available >= qty`.

        Does not commit; the caller owns the unit of work.
        """
        rows = (
            Item.query
            .filter(Item.id == item_id, Item.available >= qty)
            .update({Item.available: Item.available - qty}, synchronize_session=False)
        )
        return rows == 1

    @staticmethod
    def release(item_id: int, qty: int) -> bool:
        """Give units back, never past `quantity`. Does not commit."""
        rows = (
            Item.query
            .filter(Item.id == item_id)
            .update(
                {Item.available: case(
                    (Item.available + qty > Item.quantity, Item.quantity),
                    else_=Item.available + qty,
                )},
                synchronize_session=False,
            )
        )
        return rows == 1

    @staticmethod
    def refresh_status(item_id: int):
        """Recompute `status` from `available`/`condition`. Does not commit."""
        Item.query.filter(Item.id == item_id).update(
            {Item.status: case(
                (Item.available == 0, "all_borrowed"),
                (Item.condition == "Needs Repair", "maintenance"),
                else_="available",
            )},
            synchronize_session=False,
        )

    @staticmethod
    def low_stock(limit: int = 10):
        return (
            Item.query
            .filter(Item.available <= Item.minimum_stock)
            .order_by(Item.available.asc(), Item.id.asc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def count():
        return Item.query.count()
