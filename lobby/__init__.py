"""
Lobby Service - tournament registration and deposit tracking

Responsibilities:
- Tournament join ledger (2-slot registration per tournament)
- Room directory (room id/password per tournament)
- Deposit ledger (payment claims reviewed by admins)
"""
