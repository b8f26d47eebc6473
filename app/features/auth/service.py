import logging
from sqlalchemy.orm import Session
from app.models.admin import Admin
from app.utils.security import verify_password, get_password_hash
from app.utils.exceptions import AuthError

logger = logging.getLogger(__name__)

def authenticate_admin(db: Session, username: str, password: str) -> Admin:
    admin = db.query(Admin).filter(Admin.username == username).first()
    # Same error whether the username or the password is wrong
    if not admin or not verify_password(password, admin.password_hash):
        logger.info("Failed login attempt")
        raise AuthError()
    return admin

def ensure_default_admin(db: Session, username: str, password: str) -> bool:
    """Seed the single admin principal. Returns True if it had to be created."""
    if db.query(Admin).filter(Admin.username == username).first():
        return False
    db.add(Admin(username=username, password_hash=get_password_hash(password)))
    db.commit()
    logger.info("Default admin '%s' created", username)
    return True
