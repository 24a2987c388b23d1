from datetime import datetime, time, timedelta

from sborrowhub.errors import ConflictError, NotFoundError, ValidationError, app_assert
from sborrowhub.extensions import db
from sborrowhub.models.cart_item import CartItem
from sborrowhub.repositories.borrow_request_repo import BorrowRequestRepo
from sborrowhub.repositories.cart_repo import CartRepo
from sborrowhub.repositories.item_repo import ItemRepo
from sborrowhub.services.borrow_service import BorrowService
from sborrowhub.utils.clock import utcnow


class CartService:
    @staticmethod
    def get_cart(user_id: int):
        lines = CartRepo.list_by_user(user_id)
        return {"items": [x.to_dict() for x in lines], "totalItems": len(lines)}

    @staticmethod
    def _check_stock(item_id: int, quantity: int):
        item = ItemRepo.get(item_id)
        app_assert(item, NotFoundError("Item not found"))
        app_assert(item.available >= quantity, ConflictError("Not enough items available"))
        return item

    @staticmethod
    def add(user_id: int, data):
        CartService._check_stock(data.item_id, data.quantity)
        line = CartRepo.get(user_id, data.item_id)
        if line:
            line.quantity = data.quantity
            line.borrow_days = data.borrow_days
        else:
            CartRepo.add(CartItem(
                user_id=user_id,
                item_id=data.item_id,
                quantity=data.quantity,
                borrow_days=data.borrow_days,
            ))
        CartRepo.commit()
        return CartService.get_cart(user_id)

    @staticmethod
    def update(user_id: int, item_id: int, data):
        line = CartRepo.get(user_id, item_id)
        app_assert(line, NotFoundError("Item not found in cart"))
        if data.quantity is not None:
            CartService._check_stock(item_id, data.quantity)
            line.quantity = data.quantity
        if data.borrow_days is not None:
            line.borrow_days = data.borrow_days
        CartRepo.commit()
        return CartService.get_cart(user_id)

    @staticmethod
    def remove(user_id: int, item_id: int):
        line = CartRepo.get(user_id, item_id)
        app_assert(line, NotFoundError("Item not found in cart"))
        CartRepo.delete(line)
        CartRepo.commit()
        return CartService.get_cart(user_id)

    @staticmethod
    def clear(user_id: int):
        CartRepo.clear(user_id)
        CartRepo.commit()
        return CartService.get_cart(user_id)

    @staticmethod
    def checkout(user_id: int, data):
        """Turn every cart line into a pending borrow request, all or nothing."""
        lines = CartRepo.list_by_user(user_id)
        app_assert(lines, ValidationError("Cart is empty"))

        now = utcnow()
        start = datetime.combine(data.start_date or now.date(), time.min)
        created = []
        try:
            for line in lines:
                req = BorrowService.build_request(
                    user_id,
                    line.item_id,
                    line.quantity,
                    start,
                    start + timedelta(days=line.borrow_days),
                    data.purpose,
                    data.notes,
                    now=now,
                )
                created.append(BorrowRequestRepo.add(req))
            CartRepo.clear(user_id)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return created
