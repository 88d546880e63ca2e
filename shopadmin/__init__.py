"""Admin back-office for the Shal & Roosari shop."""
