"""routes_0001_pincodes

Create the pincode reference table:
- pincodes, with lookups by code, city, district, state and coordinates
"""

from alembic import op

revision = "routes_0001"
down_revision = None
branch_labels = ("routes",)
depends_on = None


def upgrade() -> None:
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS pincodes (
          id SERIAL PRIMARY KEY,
          pincode VARCHAR(10) NOT NULL UNIQUE,
          city VARCHAR(100),
          district VARCHAR(100),
          state_name VARCHAR(100),
          state_code VARCHAR(10),
          latitude DOUBLE PRECISION,
          longitude DOUBLE PRECISION,
          created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
          updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
        """
    )
    op.execute("CREATE INDEX IF NOT EXISTS idx_pincodes_pincode ON pincodes (pincode)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_pincodes_city ON pincodes (city)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_pincodes_district ON pincodes (district)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_pincodes_state_code ON pincodes (state_code)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_pincodes_coordinates ON pincodes (latitude, longitude)")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS pincodes")
