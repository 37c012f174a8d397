from sqlalchemy import select

from app.boudoir.core.config import settings
from app.boudoir.core.security import get_password_hash
from app.boudoir.db.models import Category, User


DEFAULT_CATEGORIES = [
    ("Tenues de mariage", "mariage", "Robes de mariée, tenues de cérémonie et accessoires pour votre jour J"),
    ("Tenues de soirée", "soiree", "Robes élégantes et tenues chic pour vos événements spéciaux"),
    ("Vêtements traditionnels", "traditionnel", "Boubous, bazin riche et tenues traditionnelles sénégalaises"),
    ("Vêtements casual", "casual", "Tenues décontractées pour le quotidien"),
    ("Accessoires", "accessoires", "Bijoux, sacs, chaussures et autres accessoires de mode"),
]


def _get_or_create_categories(db):
    existing = set(db.execute(select(Category.slug)).scalars().all())
    for name, slug, description in DEFAULT_CATEGORIES:
        if slug in existing:
            continue
        db.add(Category(name=name, slug=slug, description=description))


def _get_or_create_admin(db):
    email = settings.ADMIN_EMAIL.strip().lower()
    user = db.execute(select(User).where(User.email == email)).scalars().first()
    if user:
        return user
    user = User(
        name=settings.ADMIN_NAME,
        email=email,
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        role="ADMIN",
        status="ACTIVE",
        is_active=True,
    )
    db.add(user)
    return user


def run_seed(db):
    _get_or_create_categories(db)
    _get_or_create_admin(db)
    db.commit()


if __name__ == "__main__":
    from app.boudoir.db.session import SessionLocal

    session = SessionLocal()
    try:
        run_seed(session)
    finally:
        session.close()
