"""NextShop catalog web application."""
