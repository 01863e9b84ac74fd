from datetime import datetime
from typing import Optional
import logging
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from resume_builder.core.exceptions import ConflictError
from resume_builder.models.user import User
from resume_builder.stores.base import BaseStore

logger = logging.getLogger(__name__)


class CredentialStore(BaseStore):
    """Users and their OTP challenges"""

    def create_user(
        self,
        full_name: str,
        password_hash: str,
        language: str,
        email: Optional[str] = None,
        mobile: Optional[str] = None,
        photo: Optional[str] = None,
    ) -> User:
        try:
            with self.session("creating user") as db:
                user = User(
                    full_name=full_name,
                    email=email,
                    mobile=mobile,
                    password_hash=password_hash,
                    photo=photo,
                    language=language,
                )
                db.add(user)
                db.flush()
                db.refresh(user)
        except IntegrityError as e:
            # unique email/mobile lost a race with another signup
            logger.warning(f"Signup rejected by unique constraint: {e.orig}")
            raise ConflictError() from e
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self.session("loading user") as db:
            return db.query(User).filter(User.id == user_id).first()

    def find_by_identifier(self, identifier: str) -> Optional[User]:
        """Matches the identifier against email or mobile"""
        with self.session("looking up user") as db:
            return db.query(User).filter(
                or_(User.email == identifier, User.mobile == identifier)
            ).first()

    def find_by_mobile(self, mobile: str) -> Optional[User]:
        with self.session("looking up user by mobile") as db:
            return db.query(User).filter(User.mobile == mobile).first()

    def find_conflicting(self, email: Optional[str], mobile: Optional[str]) -> Optional[User]:
        conditions = []
        if email:
            conditions.append(User.email == email)
        if mobile:
            conditions.append(User.mobile == mobile)
        if not conditions:
            return None
        with self.session("checking for existing user") as db:
            return db.query(User).filter(or_(*conditions)).first()

    def set_otp(self, user_id: int, otp_code: str, otp_expires: datetime) -> bool:
        """Stores a pending OTP, overwriting any previous one"""
        with self.session("storing OTP") as db:
            updated = db.query(User).filter(User.id == user_id).update(
                {"otp_code": otp_code, "otp_expires": otp_expires},
                synchronize_session=False,
            )
        return updated > 0

    def mark_mobile_verified(self, user_id: int, otp_code: str) -> bool:
        """Sets the verified flag and clears code and expiry in one UPDATE.

        The UPDATE only matches while the given code is still the pending one,
        so a concurrent re-request wins over a stale verification.
        """
        with self.session("verifying mobile") as db:
            updated = db.query(User).filter(
                User.id == user_id,
                User.otp_code == otp_code,
            ).update(
                {"is_mobile_verified": True, "otp_code": None, "otp_expires": None},
                synchronize_session=False,
            )
        return updated > 0

    def delete_user(self, user_id: int) -> bool:
        """Hard delete; the resume goes with it through ON DELETE CASCADE"""
        with self.session("deleting user") as db:
            deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        return deleted > 0

    def count_users(self) -> int:
        with self.session("counting users") as db:
            return db.query(User).count()
