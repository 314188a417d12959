"""
Bundled card table.

Used when the live catalog has not been loaded yet. Covers the core
collectible cards of the original eight regions, enough to pass the
minimum catalog size check and build decks offline.
"""

from lorbuilder.models.card import CardAttributes, CardCategory

_BUNDLED_ROWS: tuple[tuple[str, str, int, CardCategory, str], ...] = (
    # Demacia
    ("01DE012", "Garen", 5, CardCategory.CHAMPION, "Demacia"),
    ("01DE022", "Fiora", 3, CardCategory.CHAMPION, "Demacia"),
    ("02DE006", "Quinn", 5, CardCategory.CHAMPION, "Demacia"),
    ("01DE002", "Brightsteel Protector", 2, CardCategory.UNIT, "Demacia"),
    ("01DE016", "Loyal Badgerbear", 3, CardCategory.UNIT, "Demacia"),
    ("01DE020", "Vanguard Defender", 2, CardCategory.UNIT, "Demacia"),
    ("01DE034", "Silverwing Vanguard", 4, CardCategory.UNIT, "Demacia"),
    ("01DE044", "Grizzled Ranger", 4, CardCategory.UNIT, "Demacia"),
    ("01DE053", "Vanguard Sergeant", 3, CardCategory.UNIT, "Demacia"),
    ("01DE014", "Fleetfeather Tracker", 1, CardCategory.UNIT, "Demacia"),
    ("01DE031", "Laurent Protege", 3, CardCategory.UNIT, "Demacia"),
    ("01DE019", "Single Combat", 2, CardCategory.SPELL, "Demacia"),
    ("01DE045", "Riposte", 3, CardCategory.SPELL, "Demacia"),
    ("01DE051", "Detain", 5, CardCategory.SPELL, "Demacia"),
    ("01DE040", "Mobilize", 3, CardCategory.SPELL, "Demacia"),
    ("01DE050", "Judgment", 8, CardCategory.SPELL, "Demacia"),

    # Freljord
    ("01FR009", "Braum", 4, CardCategory.CHAMPION, "Freljord"),
    ("01FR020", "Anivia", 7, CardCategory.CHAMPION, "Freljord"),
    ("01FR038", "Ashe", 4, CardCategory.CHAMPION, "Freljord"),
    ("02FR006", "Sejuani", 6, CardCategory.CHAMPION, "Freljord"),
    ("01FR003", "Omen Hawk", 1, CardCategory.UNIT, "Freljord"),
    ("01FR016", "Avarosan Hearthguard", 5, CardCategory.UNIT, "Freljord"),
    ("01FR024", "Icevale Archer", 2, CardCategory.UNIT, "Freljord"),
    ("01FR033", "Wyrding Stones", 3, CardCategory.UNIT, "Freljord"),
    ("01FR036", "Avarosan Trapper", 3, CardCategory.UNIT, "Freljord"),
    ("01FR025", "Avarosan Sentry", 2, CardCategory.UNIT, "Freljord"),
    ("01FR004", "Ruthless Raider", 1, CardCategory.UNIT, "Freljord"),
    ("01FR012", "Avalanche", 4, CardCategory.SPELL, "Freljord"),
    ("01FR039", "Harsh Winds", 6, CardCategory.SPELL, "Freljord"),
    ("01FR047", "Brittle Steel", 1, CardCategory.SPELL, "Freljord"),
    ("01FR053", "Fury of the North", 3, CardCategory.SPELL, "Freljord"),
    ("01FR030", "Elixir of Iron", 1, CardCategory.SPELL, "Freljord"),

    # Ionia
    ("01IO015", "Karma", 5, CardCategory.CHAMPION, "Ionia"),
    ("01IO032", "Yasuo", 4, CardCategory.CHAMPION, "Ionia"),
    ("01IO041", "Zed", 3, CardCategory.CHAMPION, "Ionia"),
    ("02IO004", "Lee Sin", 6, CardCategory.CHAMPION, "Ionia"),
    ("01IO009", "Navori Conspirator", 2, CardCategory.UNIT, "Ionia"),
    ("01IO012", "Greenglade Duo", 2, CardCategory.UNIT, "Ionia"),
    ("01IO019", "Fae Bladetwirler", 2, CardCategory.UNIT, "Ionia"),
    ("01IO029", "Jeweled Protector", 5, CardCategory.UNIT, "Ionia"),
    ("01IO044", "Kinkou Lifeblade", 2, CardCategory.UNIT, "Ionia"),
    ("01IO016", "Greenglade Caretaker", 1, CardCategory.UNIT, "Ionia"),
    ("01IO048", "Shadow Assassin", 2, CardCategory.UNIT, "Ionia"),
    ("01IO006", "Deny", 4, CardCategory.SPELL, "Ionia"),
    ("01IO018", "Will of Ionia", 4, CardCategory.SPELL, "Ionia"),
    ("01IO031", "Twin Disciplines", 3, CardCategory.SPELL, "Ionia"),
    ("01IO008", "Rush", 1, CardCategory.SPELL, "Ionia"),
    ("01IO028", "Sonic Wave", 2, CardCategory.SPELL, "Ionia"),

    # Noxus
    ("01NX020", "Draven", 3, CardCategory.CHAMPION, "Noxus"),
    ("01NX038", "Darius", 6, CardCategory.CHAMPION, "Noxus"),
    ("02NX007", "Swain", 5, CardCategory.CHAMPION, "Noxus"),
    ("01NX004", "Legion Saboteur", 2, CardCategory.UNIT, "Noxus"),
    ("01NX012", "Legion Grenadier", 2, CardCategory.UNIT, "Noxus"),
    ("01NX027", "Trifarian Gloryseeker", 2, CardCategory.UNIT, "Noxus"),
    ("01NX036", "Crimson Disciple", 2, CardCategory.UNIT, "Noxus"),
    ("01NX048", "Basilisk Rider", 4, CardCategory.UNIT, "Noxus"),
    ("01NX017", "Legion Rearguard", 1, CardCategory.UNIT, "Noxus"),
    ("01NX039", "Crimson Curator", 3, CardCategory.UNIT, "Noxus"),
    ("01NX046", "Noxian Fervor", 3, CardCategory.SPELL, "Noxus"),
    ("01NX055", "Culling Strike", 3, CardCategory.SPELL, "Noxus"),
    ("02NX004", "Death's Hand", 3, CardCategory.SPELL, "Noxus"),
    ("01NX050", "Decisive Maneuver", 5, CardCategory.SPELL, "Noxus"),
    ("01NX042", "Brothers' Bond", 4, CardCategory.SPELL, "Noxus"),

    # PiltoverZaun
    ("01PZ036", "Ezreal", 3, CardCategory.CHAMPION, "PiltoverZaun"),
    ("01PZ040", "Heimerdinger", 5, CardCategory.CHAMPION, "PiltoverZaun"),
    ("01PZ056", "Teemo", 1, CardCategory.CHAMPION, "PiltoverZaun"),
    ("02PZ008", "Vi", 5, CardCategory.CHAMPION, "PiltoverZaun"),
    ("01PZ001", "Boomcrew Rookie", 2, CardCategory.UNIT, "PiltoverZaun"),
    ("01PZ045", "Zaunite Urchin", 1, CardCategory.UNIT, "PiltoverZaun"),
    ("02PZ013", "Ballistic Bot", 2, CardCategory.UNIT, "PiltoverZaun"),
    ("01PZ034", "Sumpworks Map", 2, CardCategory.UNIT, "PiltoverZaun"),
    ("01PZ020", "Jury-Rig", 1, CardCategory.UNIT, "PiltoverZaun"),
    ("01PZ027", "Academy Prodigy", 2, CardCategory.UNIT, "PiltoverZaun"),
    ("01PZ052", "Mystic Shot", 2, CardCategory.SPELL, "PiltoverZaun"),
    ("01PZ031", "Statikk Shock", 4, CardCategory.SPELL, "PiltoverZaun"),
    ("01PZ039", "Get Excited!", 3, CardCategory.SPELL, "PiltoverZaun"),
    ("01PZ028", "Thermogenic Beam", 7, CardCategory.SPELL, "PiltoverZaun"),
    ("01PZ046", "Rummage", 1, CardCategory.SPELL, "PiltoverZaun"),

    # ShadowIsles
    ("01SI030", "Elise", 2, CardCategory.CHAMPION, "ShadowIsles"),
    ("01SI042", "Kalista", 3, CardCategory.CHAMPION, "ShadowIsles"),
    ("01SI053", "Thresh", 5, CardCategory.CHAMPION, "ShadowIsles"),
    ("01SI026", "Cursed Keeper", 2, CardCategory.UNIT, "ShadowIsles"),
    ("01SI003", "Hapless Aristocrat", 1, CardCategory.UNIT, "ShadowIsles"),
    ("01SI038", "Mistwraith", 2, CardCategory.UNIT, "ShadowIsles"),
    ("01SI049", "Blighted Caretaker", 3, CardCategory.UNIT, "ShadowIsles"),
    ("01SI054", "Wraithcaller", 4, CardCategory.UNIT, "ShadowIsles"),
    ("01SI009", "Barkbeast", 1, CardCategory.UNIT, "ShadowIsles"),
    ("01SI012", "Crawling Sensation", 1, CardCategory.UNIT, "ShadowIsles"),
    ("01SI029", "Glimpse Beyond", 2, CardCategory.SPELL, "ShadowIsles"),
    ("01SI034", "Vile Feast", 2, CardCategory.SPELL, "ShadowIsles"),
    ("01SI043", "Vengeance", 7, CardCategory.SPELL, "ShadowIsles"),
    ("01SI022", "Mark of the Isles", 1, CardCategory.SPELL, "ShadowIsles"),
    ("01SI050", "Atrocity", 6, CardCategory.SPELL, "ShadowIsles"),

    # Bilgewater
    ("02BW032", "Miss Fortune", 3, CardCategory.CHAMPION, "Bilgewater"),
    ("02BW041", "Gangplank", 5, CardCategory.CHAMPION, "Bilgewater"),
    ("02BW051", "Twisted Fate", 4, CardCategory.CHAMPION, "Bilgewater"),
    ("02BW003", "Jagged Butcher", 1, CardCategory.UNIT, "Bilgewater"),
    ("02BW013", "Petty Officer", 3, CardCategory.UNIT, "Bilgewater"),
    ("02BW020", "Hired Gun", 3, CardCategory.UNIT, "Bilgewater"),
    ("02BW045", "Jack the Winner", 6, CardCategory.UNIT, "Bilgewater"),
    ("02BW018", "Monkey Idol", 1, CardCategory.UNIT, "Bilgewater"),
    ("02BW025", "Coral Creatures", 2, CardCategory.UNIT, "Bilgewater"),
    ("02BW004", "Make it Rain", 2, CardCategory.SPELL, "Bilgewater"),
    ("02BW014", "Parrrley", 1, CardCategory.SPELL, "Bilgewater"),
    ("02BW029", "Pick a Card", 4, CardCategory.SPELL, "Bilgewater"),
    ("02BW039", "Pocket Aces", 3, CardCategory.SPELL, "Bilgewater"),
    ("02BW053", "Dreadway Deckhand", 1, CardCategory.UNIT, "Bilgewater"),

    # Targon
    ("03MT008", "Diana", 2, CardCategory.CHAMPION, "Targon"),
    ("03MT009", "Leona", 4, CardCategory.CHAMPION, "Targon"),
    ("03MT052", "Zoe", 1, CardCategory.CHAMPION, "Targon"),
    ("03MT003", "Solari Soldier", 1, CardCategory.UNIT, "Targon"),
    ("03MT012", "Lunari Duskbringer", 2, CardCategory.UNIT, "Targon"),
    ("03MT048", "Mountain Goat", 1, CardCategory.UNIT, "Targon"),
    ("03MT056", "Spacey Sketcher", 1, CardCategory.UNIT, "Targon"),
    ("03MT010", "Solari Shieldbearer", 2, CardCategory.UNIT, "Targon"),
    ("03MT027", "Lunari Priestess", 2, CardCategory.UNIT, "Targon"),
    ("03MT004", "Pale Cascade", 2, CardCategory.SPELL, "Targon"),
    ("03MT021", "Sunburst", 3, CardCategory.SPELL, "Targon"),
    ("03MT034", "Hush", 3, CardCategory.SPELL, "Targon"),
    ("03MT035", "Guiding Touch", 2, CardCategory.SPELL, "Targon"),
    ("03MT092", "Zenith Blade", 3, CardCategory.SPELL, "Targon"),
)

BUNDLED_CARDS: tuple[CardAttributes, ...] = tuple(
    CardAttributes(code=code, name=name, cost=cost, category=category, region=region)
    for code, name, cost, category, region in _BUNDLED_ROWS
)
