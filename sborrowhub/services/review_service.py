from sborrowhub.errors import AuthorizationError, ConflictError, NotFoundError, app_assert
from sborrowhub.models.review import Review
from sborrowhub.repositories.borrow_request_repo import BorrowRequestRepo
from sborrowhub.repositories.review_repo import ReviewRepo


class ReviewService:
    @staticmethod
    def create_review(reviewer_id: int, data) -> Review:
        req = BorrowRequestRepo.get(data.borrow_request_id)
        app_assert(req, NotFoundError("Borrow request not found"))
        app_assert(req.borrower_id == reviewer_id, AuthorizationError("You can only review your own borrowings"))

        txn = req.transaction
        app_assert(
            txn is not None and txn.actual_return_date is not None,
            ConflictError("Items can only be reviewed after they have been returned"),
        )
        app_assert(ReviewRepo.for_request(req.id) is None, ConflictError("This borrowing was already reviewed"))

        return ReviewRepo.create(Review(
            reviewer_id=reviewer_id,
            item_id=req.item_id,
            borrow_request_id=req.id,
            rating=data.rating,
            comment=data.comment or "",
        ))

    @staticmethod
    def list_for_item(item_id: int):
        return ReviewRepo.list_by_item(item_id)
