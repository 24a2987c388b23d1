from sborrowhub.errors import ConflictError, NotFoundError, ValidationError, app_assert
from sborrowhub.models.item import Item
from sborrowhub.repositories.borrow_request_repo import BorrowRequestRepo
from sborrowhub.repositories.item_repo import ItemRepo
from sborrowhub.repositories.review_repo import ReviewRepo
from sborrowhub.repositories.transaction_repo import TransactionRepo


def _status_for(available: int, condition: str) -> str:
    if available == 0:
        return "all_borrowed"
    if condition == "Needs Repair":
        return "maintenance"
    return "available"


class ItemService:
    @staticmethod
    def list_items(category=None, search=None, status=None):
        return ItemRepo.list_all(category=category, search=search, status=status)

    @staticmethod
    def get_item(item_id: int):
        item = ItemRepo.get(item_id)
        app_assert(item, NotFoundError("Item not found"))
        return item

    @staticmethod
    def item_detail(item_id: int) -> dict:
        item = ItemService.get_item(item_id)
        data = item.to_dict()
        data["averageRating"] = ReviewRepo.average_rating(item_id)
        return data

    @staticmethod
    def create_item(data) -> Item:
        available = data.quantity if data.available is None else data.available
        item = Item(
            name=data.name,
            description=data.description,
            category=data.category,
            image=data.image,
            quantity=data.quantity,
            available=available,
            tags=list(data.tags),
            condition=data.condition,
            max_borrow_days=data.max_borrow_days,
            minimum_stock=data.minimum_stock,
            status=_status_for(available, data.condition),
        )
        return ItemRepo.create(item)

    @staticmethod
    def update_item(item_id: int, data) -> Item:
        item = ItemService.get_item(item_id)
        changes = data.model_dump(exclude_unset=True)

        for k in ("name", "description", "category", "image", "condition", "max_borrow_days", "minimum_stock"):
            if changes.get(k) is not None:
                setattr(item, k, changes[k])
        if changes.get("tags") is not None:
            item.tags = list(changes["tags"])

        lent = item.quantity - item.available
        quantity = changes.get("quantity")
        available = changes.get("available")
        if quantity is not None:
            item.quantity = quantity
            if available is None:
                # keep units that are out on loan accounted for
                available = max(0, quantity - lent)
        if available is not None:
            if available > item.quantity:
                raise ValidationError(
                    "available cannot exceed quantity",
                    [{"field": "available", "message": f"must be at most {item.quantity}"}],
                )
            item.available = available

        if item.available == 0 or not changes.get("status"):
            item.status = _status_for(item.available, item.condition)
        else:
            item.status = changes["status"]
        ItemRepo.update()
        return item

    @staticmethod
    def delete_item(item_id: int):
        item = ItemService.get_item(item_id)
        if TransactionRepo.count_open_for_item(item_id) or BorrowRequestRepo.count_pending_for_item(item_id):
            raise ConflictError("Item has open loans or pending requests")
        ItemRepo.delete(item)
