"""
User account service: registration, login, password changes and listings.

Passwords are stored and compared as plain text, and login tells an unknown
username apart from a wrong password unless ``uniform_login_errors`` is set.
"""

from healthlog.config import AccountConfig
from healthlog.domain.models import (
    LoginResult,
    PasswordChangeResult,
    RegistrationResult,
    UserAccount,
    UserStatistics,
)
from healthlog.services.results import logger
from healthlog.services.validation import AccountValidator
from healthlog.storage.base import UserStore

USERNAME_TAKEN = "Username already exists, please choose another one"
REGISTRATION_SUCCEEDED = "Registration successful! Welcome aboard"
REGISTRATION_FAILED = "Registration failed, please try again later"

USER_NOT_FOUND = "User does not exist, please check the username or register first"
PASSWORD_INCORRECT = "Password incorrect, please try again"
INVALID_CREDENTIALS = "Invalid username or password"
LOGIN_SUCCEEDED = "Login successful!"
LOGIN_FAILED = "Login failed, please try again later"

ACCOUNT_NOT_FOUND = "User does not exist"
OLD_PASSWORD_INCORRECT = "Old password is incorrect"
PASSWORD_CHANGED = "Password changed successfully!"
PASSWORD_CHANGE_FAILED = "Failed to change password, please try again later"


class UserAccountService:
    """Account lifecycle on top of a ``UserStore``."""

    def __init__(self, store: UserStore, config: AccountConfig | None = None) -> None:
        self.store = store
        self.config = config or AccountConfig()
        self.validator = AccountValidator()
        self.logger = logger.bind(component="user_account_service")

    def register(
        self, username: str | None, password: str | None, confirm_password: str | None
    ) -> RegistrationResult:
        validation = self.validator.validate_registration(username, password, confirm_password)
        if validation.is_err():
            return RegistrationResult(success=False, message=str(validation.unwrap_err()))

        try:
            if self.store.username_exists(username):
                self.logger.info("registration_username_taken", username=username)
                return RegistrationResult(success=False, message=USERNAME_TAKEN)

            user = UserAccount(username=username, password=password)
            saved = self.store.insert(user)
        except Exception as e:
            self.logger.exception("registration_storage_failed", username=username, error=str(e))
            return RegistrationResult(success=False, message=REGISTRATION_FAILED)

        if not saved:
            self.logger.warning("registration_write_rejected", username=username)
            return RegistrationResult(success=False, message=REGISTRATION_FAILED)

        self.logger.info("user_registered", user_id=user.id, username=username)
        return RegistrationResult(success=True, message=REGISTRATION_SUCCEEDED)

    def login(self, username: str | None, password: str | None) -> LoginResult:
        validation = self.validator.validate_login(username, password)
        if validation.is_err():
            return LoginResult(success=False, user=None, message=str(validation.unwrap_err()))

        try:
            if not self.store.username_exists(username):
                self.logger.info("login_unknown_user", username=username)
                return LoginResult(success=False, user=None, message=self._unknown_user_message())

            user = self.store.authenticate(username, password)
        except Exception as e:
            self.logger.exception("login_storage_failed", username=username, error=str(e))
            return LoginResult(success=False, user=None, message=LOGIN_FAILED)

        if user is None:
            self.logger.info("login_wrong_password", username=username)
            return LoginResult(success=False, user=None, message=self._wrong_password_message())

        self.logger.info("user_logged_in", user_id=user.id)
        return LoginResult(success=True, user=user, message=LOGIN_SUCCEEDED)

    def change_password(
        self,
        user_id: int,
        old_password: str | None,
        new_password: str | None,
        confirm_password: str | None,
    ) -> PasswordChangeResult:
        try:
            user = self.store.get_by_id(user_id)
        except Exception as e:
            self.logger.exception("password_change_storage_failed", user_id=user_id, error=str(e))
            return PasswordChangeResult(success=False, message=PASSWORD_CHANGE_FAILED)

        if user is None:
            return PasswordChangeResult(success=False, message=ACCOUNT_NOT_FOUND)

        if user.password != old_password:
            self.logger.info("password_change_wrong_old_password", user_id=user_id)
            return PasswordChangeResult(success=False, message=OLD_PASSWORD_INCORRECT)

        validation = self.validator.validate_new_password(new_password, confirm_password)
        if validation.is_err():
            return PasswordChangeResult(success=False, message=str(validation.unwrap_err()))

        updated = user.model_copy(update={"password": new_password})
        try:
            saved = self.store.update(updated)
        except Exception as e:
            self.logger.exception("password_change_storage_failed", user_id=user_id, error=str(e))
            return PasswordChangeResult(success=False, message=PASSWORD_CHANGE_FAILED)

        if not saved:
            self.logger.warning("password_change_write_rejected", user_id=user_id)
            return PasswordChangeResult(success=False, message=PASSWORD_CHANGE_FAILED)

        self.logger.info("password_changed", user_id=user_id)
        return PasswordChangeResult(success=True, message=PASSWORD_CHANGED)

    def get_user_info(self, user_id: int) -> UserAccount | None:
        return self.store.get_by_id(user_id)

    def get_all_users(self) -> list[UserAccount]:
        return self.store.get_all()

    def delete_user(self, user_id: int) -> bool:
        deleted = self.store.delete(user_id)
        self.logger.info("user_deleted" if deleted else "user_delete_missed", user_id=user_id)
        return deleted

    def get_user_statistics(self) -> UserStatistics:
        return UserStatistics(total_users=self.store.count(), all_users=self.store.get_all())

    def _unknown_user_message(self) -> str:
        return INVALID_CREDENTIALS if self.config.uniform_login_errors else USER_NOT_FOUND

    def _wrong_password_message(self) -> str:
        return INVALID_CREDENTIALS if self.config.uniform_login_errors else PASSWORD_INCORRECT
