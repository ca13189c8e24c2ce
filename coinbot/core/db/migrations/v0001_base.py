DDL = """
CREATE TABLE IF NOT EXISTS accounts (
  user_id        TEXT PRIMARY KEY,
  wallet         INTEGER NOT NULL DEFAULT 0 CHECK (wallet >= 0),
  safe_balance   INTEGER NOT NULL DEFAULT 0,
  safe_capacity  INTEGER NOT NULL,
  safe_tier      INTEGER NOT NULL DEFAULT 1 CHECK (safe_tier >= 1),
  level          INTEGER NOT NULL DEFAULT 1 CHECK (level >= 1),
  xp             INTEGER NOT NULL DEFAULT 0 CHECK (xp >= 0),
  total_commands INTEGER NOT NULL DEFAULT 0 CHECK (total_commands >= 0),
  created_ts     INTEGER NOT NULL DEFAULT (strftime('%s','now')),
  updated_ts     INTEGER NOT NULL DEFAULT (strftime('%s','now')),
  CHECK (safe_balance >= 0 AND safe_balance <= safe_capacity)
);

CREATE TABLE IF NOT EXISTS claims (
  user_id         TEXT NOT NULL REFERENCES accounts(user_id),
  claim_type      TEXT NOT NULL CHECK (claim_type IN ('daily','weekly','monthly','yearly')),
  last_claimed_ts INTEGER NOT NULL,
  streak          INTEGER NOT NULL DEFAULT 1 CHECK (streak >= 1),
  PRIMARY KEY (user_id, claim_type)
);

CREATE TABLE IF NOT EXISTS cooldowns (
  user_id    TEXT NOT NULL REFERENCES accounts(user_id),
  action     TEXT NOT NULL,
  expires_ts INTEGER NOT NULL,
  PRIMARY KEY (user_id, action)
);

CREATE TABLE IF NOT EXISTS inventory (
  user_id      TEXT NOT NULL REFERENCES accounts(user_id),
  item_id      TEXT NOT NULL,
  qty          INTEGER NOT NULL DEFAULT 0 CHECK (qty >= 0),
  purchased_ts INTEGER NOT NULL DEFAULT (strftime('%s','now')),
  PRIMARY KEY (user_id, item_id)
);
"""
def apply(con): con.executescript(DDL)
