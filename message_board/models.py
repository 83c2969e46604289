from sqlalchemy.orm import declarative_base
from sqlalchemy import BigInteger, Column, Integer, String, Text
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import FunctionElement

Base = declarative_base()


class unix_now(FunctionElement):
    """Current time in whole Unix seconds, rendered per dialect."""

    type = BigInteger()
    inherit_cache = True


@compiles(unix_now)
def _unix_now_default(element, compiler, **kw):
    return "CAST(EXTRACT(EPOCH FROM CURRENT_TIMESTAMP) AS BIGINT)"


@compiles(unix_now, "sqlite")
def _unix_now_sqlite(element, compiler, **kw):
    return "(CAST(strftime('%s', 'now') AS INTEGER))"


@compiles(unix_now, "mysql")
def _unix_now_mysql(element, compiler, **kw):
    return "UNIX_TIMESTAMP()"


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    # filled in by the database on insert
    timestamp = Column(
        BigInteger,
        nullable=False,
        index=True,
        server_default=unix_now(),
    )
