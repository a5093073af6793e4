"""
Gamification feature modules for Alchemy Table.

- xp, crafting, quests, cosmetics: pure rule engines
- ingredients: static ingredient catalog
- content: YAML content pack loading
- player: progression service composing the engines
- shared: exceptions, validators, constants, base service
"""
