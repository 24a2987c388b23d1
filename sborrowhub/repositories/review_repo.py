from sqlalchemy import func

from sborrowhub.models.review import Review
from sborrowhub.extensions import db


class ReviewRepo:
    @staticmethod
    def for_request(borrow_request_id: int):
        return Review.query.filter_by(borrow_request_id=borrow_request_id).first()

    @staticmethod
    def list_by_item(item_id: int):
        return Review.query.filter_by(item_id=item_id).order_by(Review.id.desc()).all()

    @staticmethod
    def average_rating(item_id: int):
        value = db.session.query(func.avg(Review.rating)).filter(Review.item_id == item_id).scalar()
        return round(float(value), 2) if value is not None else None

    @staticmethod
    def create(review: Review):
        db.session.add(review)
        db.session.commit()
        return review
