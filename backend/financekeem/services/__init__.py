"""Business logic: lead reconciliation, quiz scoring, bookings, catalog"""
