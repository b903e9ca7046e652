"""FinanceKeem lead capture and scheduling service"""
