"""
UrlRewrite model.

Maps a human readable request path to an internal target path per store
view. Request paths are unique per store view.
"""

from sqlalchemy import Column, Integer, SmallInteger, String, Text, ForeignKey, UniqueConstraint, Index

from .base import BaseModel


class UrlRewrite(BaseModel):
    """
    Generated navigational path.

    Attributes:
        entity_type: Kind of target entity ("product")
        entity_id: Id of the target entity
        request_path: Path as requested by a browser (e.g., "men/shoes/boot.html")
        target_path: Internal destination
        redirect_type: 0 for a plain rewrite
        store_id: Store view the path belongs to
        is_autogenerated: 1 for rows created by the importer
        rewrite_metadata: JSON context, e.g. {"category_id": "4"}
    """

    __tablename__ = "url_rewrite"

    url_rewrite_id = Column(Integer, primary_key=True, autoincrement=True)
    entity_type = Column(String(32), nullable=False)
    entity_id = Column(Integer, nullable=False)
    request_path = Column(String(255), nullable=False)
    target_path = Column(String(255), nullable=False)
    redirect_type = Column(SmallInteger, nullable=False, default=0)
    store_id = Column(Integer, ForeignKey("store.store_id"), nullable=False)
    is_autogenerated = Column(SmallInteger, nullable=False, default=0)
    # "metadata" is reserved on declarative classes
    rewrite_metadata = Column("metadata", Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("request_path", "store_id", name="uq_url_rewrite_request_path_store"),
        Index("idx_url_rewrite_entity", "entity_type", "entity_id"),
    )
