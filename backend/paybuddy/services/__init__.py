"""Services Layer — the imperative shell around core/.

Invariants:
    - Services own the AsyncSession work: lookups, one commit per write
    - Business rules are delegated to pure core/ functions

Design Decisions:
    - One service per aggregate: CredentialStore (users), ConnectionGraph
      (connections), TransferLedger (transactions)
    - Graph and ledger read users through CredentialStore, never write them
"""
