"""
Sequential identifiers derived from the highest stored value.

Read-then-increment is not atomic: two concurrent creations can read the same
last value. Unique constraints on the target columns turn such a collision
into an IntegrityError instead of a duplicate identifier.
"""
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession


def format_sequence_code(prefix: str, number: int, width: int = 6) -> str:
    return f"{prefix}{number:0{width}d}"


async def next_sequence_code(db: AsyncSession, column, prefix: str, width: int = 6) -> str:
    """Return ``prefix`` + the next zero-padded number after the highest code with that prefix"""
    # Longer codes sort first once the counter outgrows the padding
    result = await db.execute(
        select(column)
        .where(column.like(f"{prefix}%"))
        .order_by(func.length(column).desc(), column.desc())
        .limit(1)
    )
    last_code = result.scalar_one_or_none()

    next_number = 1
    if last_code:
        suffix = last_code[len(prefix):]
        if suffix.isdigit():
            next_number = int(suffix) + 1

    return format_sequence_code(prefix, next_number, width)


async def next_sequence_number(db: AsyncSession, column) -> int:
    """Return max(column) + 1, or 1 for an empty table"""
    result = await db.execute(select(func.max(column)))
    last_number = result.scalar()
    return (last_number or 0) + 1
