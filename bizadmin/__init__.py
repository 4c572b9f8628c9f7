"""Business administration backend: jobs, purchase orders and their lookup tables."""
