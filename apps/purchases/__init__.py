"""
Purchases App - Credit Purchases and Returns

This app manages team purchase requests against the resource catalog:
credit is debited on request, administrators confirm (taking stock) or
cancel (refunding credit), and returnable items are reconciled when they
come back.

Key Features:
- Single and batch purchase requests with per-team quotas
- Per-line review with partial approval
- Physical return tracking
- E-mail notifications on every state change

Architecture:
- Models: Purchase
- Services: quota, purchase_creation, purchase_review, returns, queries, notifications
- Views: TeamPurchaseViewSet, AdminPurchaseViewSet
"""
