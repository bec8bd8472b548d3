"""Domain modules: accounts, wallets, deposits, settlement, orders, currency."""
