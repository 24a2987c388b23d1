from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token

from sborrowhub.errors import AppError, ConflictError, NotFoundError, ValidationError, app_assert
from sborrowhub.models.user import User
from sborrowhub.repositories.user_repo import UserRepo
from sborrowhub.utils.clock import utcnow


def _placeholder_picture(firstname: str, lastname: str) -> str:
    return f"https://placehold.co/400x400/be8443/FFFFFF?text={firstname[0]}+{lastname[0]}"


class AuthService:
    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "studentId": user.student_id}
        )

    @staticmethod
    def register(data, role: str = "user"):
        if data.password != data.confirmpassword:
            raise ValidationError("Passwords do not match", [{"field": "confirmpassword", "message": "must match password"}])
        app_assert(not UserRepo.exists(data.student_id, data.email), ConflictError("User already exists"))

        user = User(
            student_id=data.student_id,
            firstname=data.firstname,
            lastname=data.lastname,
            email=data.email,
            phone_number=data.phone_number,
            college=data.college,
            department=data.department,
            profile_picture=data.profile_picture or _placeholder_picture(data.firstname, data.lastname),
            password_hash=generate_password_hash(data.password),
            role=role,
        )
        UserRepo.create(user)
        return user

    @staticmethod
    def login(login: str, password: str):
        user = UserRepo.get_by_login(login)
        app_assert(user, NotFoundError("User not found"))
        if not check_password_hash(user.password_hash, password):
            raise AppError("Invalid credentials", 401)
        app_assert(user.status != "inactive", AppError("Account is inactive", 403))

        user.last_login_at = utcnow()
        user.is_online = True
        user.status = "active"
        UserRepo.commit()

        return AuthService.issue_token(user), user

    @staticmethod
    def logout(user_id: int):
        user = UserRepo.get_by_id(user_id)
        if user:
            user.is_online = False
            user.status = "offline"
            UserRepo.commit()

    @staticmethod
    def get_user(user_id: int) -> User:
        user = UserRepo.get_by_id(user_id)
        app_assert(user, NotFoundError("User not found"))
        return user

    @staticmethod
    def update_profile(user_id: int, data):
        user = AuthService.get_user(user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in changes and changes["email"] != user.email:
            other = UserRepo.get_by_email(changes["email"])
            app_assert(not other or other.id == user.id, ConflictError("Email already in use"))

        for k in ("firstname", "lastname", "email", "phone_number", "college", "department", "profile_picture"):
            if changes.get(k):
                setattr(user, k, changes[k])

        UserRepo.commit()
        return user

    @staticmethod
    def change_password(user_id: int, data):
        user = AuthService.get_user(user_id)
        if not check_password_hash(user.password_hash, data.current_password):
            raise AppError("Current password is incorrect", 401)
        if data.password != data.confirmpassword:
            raise ValidationError("Passwords do not match", [{"field": "confirmpassword", "message": "must match password"}])
        user.password_hash = generate_password_hash(data.password)
        UserRepo.commit()
