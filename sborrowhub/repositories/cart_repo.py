from sborrowhub.models.cart_item import CartItem
from sborrowhub.extensions import db


class CartRepo:
    @staticmethod
    def list_by_user(user_id: int):
        return CartItem.query.filter_by(user_id=user_id).order_by(CartItem.id.asc()).all()

    @staticmethod
    def get(user_id: int, item_id: int):
        return CartItem.query.filter_by(user_id=user_id, item_id=item_id).first()

    @staticmethod
    def add(line: CartItem):
        db.session.add(line)
        return line

    @staticmethod
    def delete(line: CartItem):
        db.session.delete(line)

    @staticmethod
    def clear(user_id: int):
        CartItem.query.filter_by(user_id=user_id).delete(synchronize_session=False)

    @staticmethod
    def commit():
        db.session.commit()
