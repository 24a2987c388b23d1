from datetime import datetime, time, timedelta

from sborrowhub.errors import ConflictError, NotFoundError, ValidationError, app_assert
from sborrowhub.models.borrow_request import BorrowRequest
from sborrowhub.repositories.borrow_request_repo import BorrowRequestRepo
from sborrowhub.repositories.item_repo import ItemRepo
from sborrowhub.repositories.transaction_repo import TransactionRepo
from sborrowhub.utils.clock import utcnow, to_naive_utc
from sborrowhub.utils.request_code import generate_request_code


class BorrowService:
    @staticmethod
    def _validate_dates(item, borrow_date: datetime, return_date: datetime, now: datetime):
        today = datetime.combine(now.date(), time.min)
        if borrow_date < today:
            raise ValidationError(
                "Borrow date cannot be in the past",
                [{"field": "borrowDate", "message": "must be today or later"}],
            )
        if return_date <= borrow_date:
            raise ValidationError(
                "Return date must be after borrow date",
                [{"field": "returnDate", "message": "must be after borrowDate"}],
            )
        if return_date - borrow_date > timedelta(days=item.max_borrow_days):
            raise ValidationError(
                f"{item.name} can be borrowed for at most {item.max_borrow_days} day(s)",
                [{"field": "returnDate", "message": f"loan exceeds {item.max_borrow_days} day(s)"}],
            )

    @staticmethod
    def build_request(borrower_id: int, item_id: int, quantity: int,
                      borrow_date: datetime, return_date: datetime,
                      purpose: str, notes: str = "", now: datetime = None) -> BorrowRequest:
        """Validate a new request against the item; nothing is written."""
        now = now or utcnow()
        borrow_date, return_date = to_naive_utc(borrow_date), to_naive_utc(return_date)

        item = ItemRepo.get(item_id)
        app_assert(item, NotFoundError("Item not found"))
        # advisory only; approval re-checks under a guarded update
        app_assert(item.available >= quantity, ConflictError(f"Only {item.available} item(s) available"))
        BorrowService._validate_dates(item, borrow_date, return_date, now)

        return BorrowRequest(
            request_code=generate_request_code(now),
            borrower_id=borrower_id,
            item_id=item_id,
            quantity=quantity,
            borrow_date=borrow_date,
            return_date=return_date,
            purpose=purpose,
            notes=notes or "",
            status="pending",
        )

    @staticmethod
    def create_request(borrower_id: int, data) -> BorrowRequest:
        req = BorrowService.build_request(
            borrower_id,
            data.item_id,
            data.quantity,
            data.borrow_date,
            data.return_date,
            data.purpose,
            data.notes,
        )
        return BorrowRequestRepo.create(req)

    @staticmethod
    def my_requests(user_id: int):
        return BorrowRequestRepo.list_by_borrower(user_id)

    @staticmethod
    def my_transactions(user_id: int):
        return TransactionRepo.list_by_borrower(user_id)
