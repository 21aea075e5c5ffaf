"""
Ingredient-label safety core: parse, normalize, match, classify and summarize
packaged-food ingredient lists against a restriction taxonomy.
"""
