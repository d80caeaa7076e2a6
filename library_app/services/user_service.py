from flask import current_app

from library_app.errors import BusinessRuleViolation, NotFound, ValidationFailed
from library_app.models.user import User
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.repositories.user_repo import UserRepo

SELF_SERVICE_FIELDS = ("name", "email", "password")
ADMIN_FIELDS = SELF_SERVICE_FIELDS + ("library_id", "role")


class UserService:
    @staticmethod
    def get_user(user_id: int):
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    @staticmethod
    def _check_unique(changes: dict, user_id: int | None = None):
        errors = {}
        if "email" in changes:
            existing = UserRepo.get_by_email(changes["email"])
            if existing and existing.id != user_id:
                errors["email"] = ["The email has already been taken."]
        if "library_id" in changes:
            existing = UserRepo.get_by_library_id(changes["library_id"])
            if existing and existing.id != user_id:
                errors["library_id"] = ["The library id has already been taken."]
        if errors:
            raise ValidationFailed(errors)

    @staticmethod
    def create_user(payload):
        data = payload.model_dump()
        UserService._check_unique(data)

        user = User(
            name=data["name"],
            email=data["email"],
            library_id=data["library_id"],
            role=data["role"],
        )
        user.set_password(data["password"])
        UserRepo.create(user)
        current_app.logger.info(f"[users] Created user id={user.id} role={user.role}")
        return user

    @staticmethod
    def update_user(user: User, payload, by_admin: bool):
        allowed = ADMIN_FIELDS if by_admin else SELF_SERVICE_FIELDS
        changes = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items()
            if k in allowed
        }
        UserService._check_unique(changes, user.id)

        for k in ["name", "email", "library_id", "role"]:
            if k in changes:
                setattr(user, k, changes[k])
        if "password" in changes:
            user.set_password(changes["password"])

        UserRepo.update()
        return user

    @staticmethod
    def delete_user(user: User):
        if BorrowingRepo.count_active(user_id=user.id) > 0:
            raise BusinessRuleViolation("Cannot delete user with active borrowings")
        user_id = user.id
        UserRepo.delete(user)
        current_app.logger.info(f"[users] Deleted user id={user_id}")
