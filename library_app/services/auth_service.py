import secrets

from flask import current_app
from flask_jwt_extended import create_access_token

from library_app.errors import Unauthorized, ValidationFailed
from library_app.extensions import db
from library_app.models.user import User
from library_app.models.token_blocklist import TokenBlocklist
from library_app.repositories.user_repo import UserRepo


class AuthService:
    @staticmethod
    def _new_library_id() -> str:
        while True:
            candidate = f"LIB{secrets.token_hex(4).upper()}"
            if not UserRepo.get_by_library_id(candidate):
                return candidate

    @staticmethod
    def register(payload):
        errors = {}
        if UserRepo.get_by_email(payload.email):
            errors["email"] = ["The email has already been taken."]
        if payload.library_id and UserRepo.get_by_library_id(payload.library_id):
            errors["library_id"] = ["The library id has already been taken."]
        if errors:
            raise ValidationFailed(errors)

        user = User(
            name=payload.name,
            email=payload.email,
            library_id=payload.library_id or AuthService._new_library_id(),
            role="user"  # self-registration never grants admin
        )
        user.set_password(payload.password)
        UserRepo.create(user)

        current_app.logger.info(f"[auth] Registered user id={user.id} library_id={user.library_id}")
        return create_access_token(identity=user), user

    @staticmethod
    def login(email: str, password: str):
        user = UserRepo.get_by_email(email)
        if not user or not user.check_password(password):
            current_app.logger.warning(f"[auth] Failed login for {email}")
            raise Unauthorized("Invalid credentials")

        token = create_access_token(
            identity=user,
            additional_claims={"role": user.role, "name": user.name}
        )
        return token, user

    @staticmethod
    def logout(jti: str):
        db.session.add(TokenBlocklist(jti=jti))
        db.session.commit()
