from sqlalchemy import or_

from sborrowhub.models.user import User
from sborrowhub.extensions import db


class UserRepo:
    @staticmethod
    def get_by_login(login: str):
        return User.query.filter(or_(User.student_id == login, User.email == login)).first()

    @staticmethod
    def get_by_email(email: str):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def exists(student_id: str, email: str) -> bool:
        return User.query.filter(
            or_(User.student_id == student_id, User.email == email)
        ).first() is not None

    @staticmethod
    def get_by_id(user_id: int):
        return db.session.get(User, user_id)

    @staticmethod
    def list_all(role=None):
        q = User.query
        if role:
            q = q.filter_by(role=role)
        return q.order_by(User.id.asc()).all()

    @staticmethod
    def count(role=None):
        q = User.query
        if role:
            q = q.filter_by(role=role)
        return q.count()

    @staticmethod
    def create(user: User):
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def commit():
        db.session.commit()
