"""PayBuddy — peer-to-peer transfers between connected users."""
