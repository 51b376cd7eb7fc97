"""Advertisement repository - Database operations for advertisements"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Advertisement


class AdvertisementRepository:
    """Repository for advertisement database operations"""

    @staticmethod
    def get_advertisements(db: Session) -> list[Advertisement]:
        """Get all advertisements, newest first"""
        return db.query(Advertisement).order_by(Advertisement.created_at.desc()).all()

    @staticmethod
    def get_advertisement_by_id(db: Session, advertisement_id: str) -> Optional[Advertisement]:
        return db.query(Advertisement).filter(Advertisement.id == advertisement_id).first()

    @staticmethod
    def get_advertisements_by_email(db: Session, email: str) -> list[Advertisement]:
        """Exact match on the stored contact email"""
        return (
            db.query(Advertisement)
            .filter(Advertisement.email == email)
            .order_by(Advertisement.created_at.desc())
            .all()
        )

    @staticmethod
    def create_advertisement(db: Session, **advertisement_data) -> Advertisement:
        advertisement = Advertisement(**advertisement_data)
        db.add(advertisement)
        db.commit()
        db.refresh(advertisement)
        return advertisement

    @staticmethod
    def update_advertisement(db: Session, advertisement: Advertisement, **updates) -> Advertisement:
        """Update an advertisement with provided fields; None values are left untouched"""
        for key, value in updates.items():
            if value is not None and hasattr(advertisement, key):
                setattr(advertisement, key, value)

        db.commit()
        db.refresh(advertisement)
        return advertisement

    @staticmethod
    def delete_advertisement(db: Session, advertisement: Advertisement) -> None:
        db.delete(advertisement)
        db.commit()
