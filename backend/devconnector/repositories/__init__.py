"""Repositories — sole owners of CRUD access to one table each.

Invariants:
    - Every repository is constructed with the request's AsyncSession (injected
      by get_db); none reaches for the process-wide db_manager
    - Repositories only touch their own table; the profile's public user fields
      arrive through the eager-loaded relationship, not a manual join
    - Mutating methods that end a unit of work commit; staging methods
      (delete_by_user) leave the commit to the caller's last step
"""
