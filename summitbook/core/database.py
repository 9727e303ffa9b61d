# summitbook/core/database.py
import asyncpg
from summitbook.core.config import settings
from summitbook.models.booking import BookingRecord
import logging
import json

logger = logging.getLogger(__name__)

async def get_db_connection():
    """Yield a connection, or None when no database is configured."""
    if not settings.DATABASE_URL:
        yield None
        return
    conn = await asyncpg.connect(settings.DATABASE_URL)
    try:
        yield conn
    finally:
        await conn.close()

async def create_tables():
    if not settings.DATABASE_URL:
        logger.warning("DATABASE_URL not set, bookings will not be persisted")
        return
    conn = await asyncpg.connect(settings.DATABASE_URL)
    try:
        await conn.execute('''
        CREATE TABLE IF NOT EXISTS bookings (
            id SERIAL PRIMARY KEY,
            booking_id VARCHAR(64) UNIQUE NOT NULL,
            mountain_id VARCHAR(255),
            mountain_name VARCHAR(255),
            booking_date VARCHAR(32),
            participants INTEGER NOT NULL DEFAULT 1,
            customer_name VARCHAR(255),
            customer_email VARCHAR(255),
            customer_phone VARCHAR(64),
            amount NUMERIC(12, 2) NOT NULL,
            currency VARCHAR(3) NOT NULL,
            status VARCHAR(50) NOT NULL DEFAULT 'confirmed',
            payment_method VARCHAR(50) NOT NULL,
            provider_order_id VARCHAR(255),
            provider_payment_id VARCHAR(255),
            payment_status VARCHAR(50),
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        )
        ''')

        await conn.execute('''
        CREATE TABLE IF NOT EXISTS activity_logs (
            id SERIAL PRIMARY KEY,
            action VARCHAR(255) NOT NULL,
            booking_id VARCHAR(64),
            details JSONB,
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        )
        ''')

        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise
    finally:
        await conn.close()

async def save_booking(conn, booking: BookingRecord):
    """Insert a booking, or refresh its payment fields if it already exists."""
    await conn.execute('''
        INSERT INTO bookings (
            booking_id, mountain_id, mountain_name, booking_date, participants,
            customer_name, customer_email, customer_phone, amount, currency,
            status, payment_method, provider_order_id, provider_payment_id, payment_status
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15)
        ON CONFLICT (booking_id) DO UPDATE
        SET status = EXCLUDED.status,
            provider_order_id = EXCLUDED.provider_order_id,
            provider_payment_id = EXCLUDED.provider_payment_id,
            payment_status = EXCLUDED.payment_status,
            updated_at = CURRENT_TIMESTAMP
    ''',
        booking.booking_id,
        booking.mountain_id,
        booking.mountain_name,
        booking.date,
        booking.participants,
        booking.customer_name,
        booking.customer_email,
        booking.customer_phone,
        booking.amount,
        booking.currency,
        booking.status.value,
        booking.payment_method.value,
        booking.provider_order_id,
        booking.provider_payment_id,
        booking.payment_status,
    )

async def log_activity(conn, action, booking_id=None, details=None):
    """Record a booking lifecycle event"""
    try:
        if details is not None and not isinstance(details, str):
            try:
                details = json.dumps(details)
            except Exception:
                details = str(details)
        await conn.execute('''
            INSERT INTO activity_logs (action, booking_id, details)
            VALUES ($1, $2, $3)
        ''', action, booking_id, details)
    except Exception as e:
        logger.error(f"Error logging activity: {e}")
        raise
