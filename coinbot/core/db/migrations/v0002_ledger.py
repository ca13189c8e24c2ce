DDL = """
CREATE TABLE IF NOT EXISTS ledger_entries (
  id      INTEGER PRIMARY KEY AUTOINCREMENT,
  user_id TEXT NOT NULL,
  kind    TEXT NOT NULL CHECK (kind IN ('credit','debit','deposit','withdraw','xp')),
  amount  INTEGER NOT NULL CHECK (amount >= 0),
  reason  TEXT NOT NULL DEFAULT '',
  ts      INTEGER NOT NULL DEFAULT (strftime('%s','now'))
);

-- append-only
CREATE TRIGGER IF NOT EXISTS ledger_entries_no_update
BEFORE UPDATE ON ledger_entries
BEGIN
  SELECT RAISE(ABORT, 'ledger_entries is append-only');
END;
"""
def apply(con): con.executescript(DDL)
