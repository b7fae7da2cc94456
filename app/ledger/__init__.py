"""
Ledger - Postings and balance consistency for accounts.

Every change to an account balance is a posting: a credit or a debit
recorded in the same database transaction as the balance update. The
stored balance therefore always equals the credits minus the debits.

Public API (import from the submodules; this package is a Django app and
loads before the model registry is ready):

    ledger.services:
        ledger - Singleton instance of LedgerService
        LedgerService - post(), credit(), debit()

    ledger.queries:
        ledger_queries - Singleton instance of LedgerQueryService
        LedgerQueryService - list_transactions(), account_summary(),
            balance_history(), iter_balance_history(), check_balance()

    ledger.models:
        Posting - One immutable credit or debit
        PostingKind - CREDIT / DEBIT

    ledger.types:
        TransactionFilters, TransactionPage, AccountSummary,
        BalanceHistoryPoint, BalanceCheck

    ledger.cache:
        SummaryCache - Summary cache over any get/set/delete backend

    ledger.exceptions:
        LedgerError, InvalidAmount, InvalidPostingKind, InsufficientFunds,
        AccountBusy, ImmutablePosting, AccountNotFound

Usage:
    from ledger.exceptions import InsufficientFunds
    from ledger.queries import ledger_queries
    from ledger.services import ledger

    ledger.credit(account.id, Decimal("100"))
    try:
        ledger.debit(account.id, Decimal("250"))
    except InsufficientFunds as e:
        print(f"Need {e.required}, have {e.available}")

    ledger_queries.account_summary(account.id)
    # AccountSummary(balance=Decimal('100'), total_credits=..., total_debits=...)
"""
