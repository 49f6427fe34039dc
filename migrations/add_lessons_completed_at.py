"""
Migration: separate lesson completion from certificate completion.

- enrollments: add lessons_completed_at (DATETIME, nullable), set when progress
  first reaches 100. Existing rows at 100% are stamped with updated_at.
"""

import sqlite3
import os


def run_migration():
    db_path = os.getenv("DATABASE_URL", "sqlite:///./ai-super-hub.db").replace("sqlite:///", "")
    conn = None
    try:
        conn = sqlite3.connect(db_path)
        cursor = conn.cursor()

        cursor.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='enrollments'"
        )
        if not cursor.fetchone():
            print("enrollments table not found. Skipping.")
            return

        try:
            cursor.execute("ALTER TABLE enrollments ADD COLUMN lessons_completed_at DATETIME")
            print("enrollments: added lessons_completed_at")
        except sqlite3.OperationalError as e:
            if "duplicate column" in str(e).lower():
                print("enrollments.lessons_completed_at already exists. Skipping.")
            else:
                raise

        cursor.execute(
            "UPDATE enrollments SET lessons_completed_at = updated_at "
            "WHERE progress >= 100 AND lessons_completed_at IS NULL"
        )
        print(f"enrollments: stamped {cursor.rowcount} fully completed rows")

        conn.commit()
        print("Migration add_lessons_completed_at completed successfully")

    except sqlite3.Error as e:
        print(f"Error during migration: {e}")
        if conn:
            conn.rollback()
    finally:
        if conn:
            conn.close()


if __name__ == "__main__":
    run_migration()
