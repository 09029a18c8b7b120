"""Application services: pricing, company order aggregation, access policy and reporting."""
