"""Class template tables.

A class is one ``class`` row plus any number of label, folder, file and script
rows pointing at it. Child rows are removed together with their class.
"""

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ClassRecord(Base):
    """Class name row - its id is the key of every child row."""

    __tablename__ = "class"

    class_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Stored lower-case
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)


class ClassLabel(Base):
    __tablename__ = "class_label"
    __table_args__ = (UniqueConstraint("class_id", "label"),)

    class_label_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    class_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("class.class_id", ondelete="CASCADE"), nullable=False, index=True
    )
    label: Mapped[str] = mapped_column(String(255), nullable=False, index=True)


class ClassFolder(Base):
    __tablename__ = "class_folder"
    __table_args__ = (UniqueConstraint("class_id", "target"),)

    class_folder_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    class_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("class.class_id", ondelete="CASCADE"), nullable=False, index=True
    )
    target: Mapped[str] = mapped_column(String(1024), nullable=False)

    # NULL means "create an empty folder"
    template: Mapped[str | None] = mapped_column(String(1024), nullable=True)


class ClassFile(Base):
    __tablename__ = "class_file"
    __table_args__ = (UniqueConstraint("class_id", "target"),)

    class_file_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    class_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("class.class_id", ondelete="CASCADE"), nullable=False, index=True
    )
    target: Mapped[str] = mapped_column(String(1024), nullable=False)

    # NULL means "create an empty file"
    template: Mapped[str | None] = mapped_column(String(1024), nullable=True)


class ClassScript(Base):
    __tablename__ = "class_script"
    __table_args__ = (UniqueConstraint("class_id", "name"),)

    class_script_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    class_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("class.class_id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    run_as_sudo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
