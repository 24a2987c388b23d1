from sborrowhub.extensions import db
from sborrowhub.utils.clock import utcnow, iso


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.String(10), unique=True, nullable=False, index=True)
    firstname = db.Column(db.String(100), nullable=False)
    lastname = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    phone_number = db.Column(db.String(20), nullable=False, default="")
    college = db.Column(db.String(200), nullable=False, default="")
    department = db.Column(db.String(200), nullable=False, default="")
    password_hash = db.Column(db.String(255), nullable=False)
    profile_picture = db.Column(db.String(500), nullable=False, default="")

    role = db.Column(db.String(20), nullable=False, default="user")  # user/officer/admin
    status = db.Column(db.String(20), nullable=False, default="active")  # active/offline/inactive
    last_login_at = db.Column(db.DateTime, nullable=True)
    is_online = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def fullname(self):
        return f"{self.firstname} {self.lastname}"

    def to_dict(self):
        return {
            "id": self.id,
            "studentId": self.student_id,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "fullname": self.fullname,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "college": self.college,
            "department": self.department,
            "profilePicture": self.profile_picture,
            "role": self.role,
            "status": self.status,
            "lastLoginAt": iso(self.last_login_at),
            "isOnline": bool(self.is_online),
            "createdAt": iso(self.created_at),
        }
