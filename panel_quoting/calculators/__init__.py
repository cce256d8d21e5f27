"""
Panel dimensioning & pricing engine.

Pure Python math. Calculators never touch the database.
Given raw opening measurements and the chosen attachment options,
produce exact cut dimensions, a size tier, and an itemized price.
"""
