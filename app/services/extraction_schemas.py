# JSON schemák a képekből történő adatkinyeréshez (OCR)
# A leírások a modellnek szólnak, ezért magyarul és részletesen szerepelnek.

DOCUMENT_LIST_SCHEMA = {
    "type": "object",
    "properties": {
        "documents": {
            "type": "array",
            "description": "A képen látható összes dokumentumgomb szövegének listája.",
            "items": {"type": "string"},
        }
    },
    "required": ["documents"],
}

TASK_LIST_SCHEMA = {
    "type": "object",
    "properties": {
        "informaciok": {
            "type": "array",
            "description": (
                "A képen látható összes napi információs blokk. Minden blokk egy 'Téma', "
                "opcionálisan 'Érintett' kör, és a 'Tartalom' részből áll. A 'tartalmaz_kepet' "
                "mező jelezze, ha a blokkhoz vizuális tartalom (kép) is tartozik."
            ),
            "items": {
                "type": "object",
                "properties": {
                    "tema": {"type": "string", "description": "Az információs blokk címe vagy témája."},
                    "erintett": {
                        "type": "string",
                        "description": "Az érintettek köre (pl. 'Kassza', 'Mindenki'). Ha nincs expliciten megadva, hagyd üresen.",
                    },
                    "tartalom": {"type": "string", "description": "Az információs blokk teljes szöveges tartalma."},
                    "tartalmaz_kepet": {
                        "type": "boolean",
                        "description": "Igaz, ha az információs blokkhoz egy vagy több kép is tartozik a dokumentumon.",
                    },
                },
                "required": ["tema", "tartalom", "tartalmaz_kepet"],
            },
        }
    },
    "required": ["informaciok"],
}

_DAY_LABELS = [
    ("monday", "HÉTFŐ"),
    ("tuesday", "KEDD"),
    ("wednesday", "SZERDA"),
    ("thursday", "CSÜTÖRTÖK"),
    ("friday", "PÉNTEK"),
    ("saturday", "SZOMBAT"),
    ("sunday", "VASÁRNAP"),
]


def _schedule_day_properties():
    properties = {"name": {"type": "string", "description": "Név a bal oszlopból"}}
    for key, label in _DAY_LABELS:
        properties[key] = {"type": "string", "description": f"{label} - műszak időpont"}
        properties[f"{key}_net"] = {"type": "string", "description": f"{label} - nettó munkaidő (pl. '8:30')"}
    return properties


SCHEDULE_SCHEMA = {
    "type": "object",
    "properties": {
        "employees": {
            "type": "array",
            "description": """
DAYFORCE BEOSZTÁS - MŰSZAK IDŐPONTOK ÉS NETTÓ MUNKAIDŐ KIOLVASÁSA

TÁBLÁZAT SZERKEZET:
- BAL SZÉLSŐ OSZLOP = Munkavállalók nevei
- FELSŐ SOR = 7 NAP OSZLOPAI (Hétfő, Kedd, Szerda, Csütörtök, Péntek, Szombat, Vasárnap)
- VASTAG FÜGGŐLEGES VONALAK = Napok közötti határok, ne olvasd át az adatokat egyik napból a másikba!

MINDEN CELLÁBAN:
1. VASTAG BETŰS MŰSZAK IDŐ: pl. "10:00-19:00"
2. MELLETTE VAGY ALATTA KISEBB SZÁM: pl. "8:30" - EZ A NETTÓ MUNKAIDŐ
3. ALATTA tevékenységek (pl. "Vezető: 10:00-19:00", "SZ:13:00-13:30") - EZEK NEM KELLENEK!

STÁTUSZOK:
- "P" -> "P", nettó: null
- "S" -> "S", nettó: null
- "Munkaszüneti nap" -> "Munkaszüneti nap", nettó: null
- ÜRES cella -> "-", nettó: null
""",
            "items": {
                "type": "object",
                "properties": _schedule_day_properties(),
                "required": ["name"] + [key for key, _ in _DAY_LABELS],
            },
        }
    },
    "required": ["employees"],
}

DISTRIBUTION_SCHEMA = {
    "type": "object",
    "properties": {
        "delivery_note_number": {
            "type": "string",
            "description": "A szállítólevél száma, ami a dokumentum tetején található.",
        },
        "main_category": {
            "type": "string",
            "description": "FONTOS SZABÁLY: Nézd meg a szállítólevél szám ALATTI sort, az a fő kategória.",
        },
        "area": {
            "type": "string",
            "description": "A dokumentum bal oldalán, a 'Terület' szó mellett található azonosító.",
        },
        "products": {
            "type": "array",
            "description": "A dokumentumban található összes termék listája, PONTOS SORRENDBEN.",
            "items": {
                "type": "object",
                "properties": {
                    "order": {"type": "number", "description": "A termék sorszáma a dokumentumon."},
                    "article_number": {"type": "string", "description": "A termék cikkszáma a 'Cikk' oszlopból."},
                    "product_name": {"type": "string", "description": "A termék neve."},
                    "quantity": {
                        "type": "number",
                        "description": "FONTOS: Mindig a 'Kiszállítva mennyiség' oszlopban lévő értéket használd!",
                    },
                    "unit": {"type": "string", "enum": ["karton", "db"], "description": "A mennyiség egysége."},
                },
                "required": ["order", "article_number", "product_name", "quantity", "unit"],
            },
        },
    },
    "required": ["delivery_note_number", "main_category", "area", "products"],
}

PRICE_LABEL_SCHEMA = {
    "type": "object",
    "properties": {
        "article_number": {
            "type": "string",
            "description": (
                "A cikkszám, ami az ártábla BAL ALSÓ sarkában található. Általában 6-8 számjegyű. "
                "Csak a számokat add vissza, kötőjelek és egyéb karakterek nélkül!"
            ),
        },
        "product_name": {
            "type": "string",
            "description": "A termék neve, ami az ártáblán a legnagyobb betűmérettel van írva.",
        },
        "description": {
            "type": "string",
            "description": "A termék kiegészítő leírása a név alatt kisebb betűkkel (pl. 'teljes kiörlésű 500 g').",
        },
        "category": {
            "type": "string",
            "enum": ["troso", "mopro", "tiko", "bakeoff"],
            "description": (
                "A tárolás helye: 'troso' = szárazáru, 'mopro' = hűtött, 'tiko' = fagyasztott, "
                "'bakeoff' = pékáru. Példák: tej->mopro, fagyasztott pizza->tiko, tészta->troso, croissant->bakeoff"
            ),
        },
    },
    "required": ["article_number", "product_name", "category"],
}

RETURN_LIST_SCHEMA = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "description": "A táblázatban szereplő összes terméksor a PONTOS SORRENDBEN, ahogy látszanak.",
            "items": {
                "type": "object",
                "properties": {
                    "section_title": {
                        "type": "string",
                        "description": (
                            "A termék feletti szekció címe (pl. 'Parkside', 'PLU', 'Beraktározás'). "
                            "Ha nincs cím felette, az utolsó vastag betűs címet írd be."
                        ),
                    },
                    "bizonylat_szam": {
                        "type": "string",
                        "description": "A bizonylatszám a szekció címe felett. Ha nincs, akkor 'Ismeretlen'.",
                    },
                    "cikkszam": {"type": "string", "description": "A termék cikkszáma (bal oldali oszlop)."},
                    "megnevezes": {"type": "string", "description": "A termék neve (középső oszlop)."},
                    "tervkeszlet": {
                        "type": "number",
                        "description": "A jobb oldali oszlopban lévő szám (Tervkészlet). Ha üres vagy 0, írj 0-t.",
                    },
                },
                "required": ["section_title", "bizonylat_szam", "cikkszam", "megnevezes", "tervkeszlet"],
            },
        }
    },
    "required": ["items"],
}

BARCODE_SCHEMA = {
    "type": "object",
    "properties": {
        "barcode": {
            "type": "string",
            "description": (
                "A vonalkód alatti számsor, vagy az 'IAN' jelölés melletti számsor. "
                "Csak a számokat add vissza, kötőjelek és egyéb karakterek nélkül."
            ),
        }
    },
    "required": ["barcode"],
}

EMPLOYEE_LIST_SCHEMA = {
    "type": "object",
    "properties": {
        "employees": {
            "type": "array",
            "description": """
DAYFORCE MUNKAVÁLLALÓK LISTA BEOLVASÁSA

A képen egy mobilos lista látható szekciókban csoportosítva.
- SZEKCIÓ CÍMEK: "1. Üzletvezető", "2. Üzletvezető" stb.
- ALATTUK: a munkavállalók neve (pl. "Fehér, Zsuzsanna")
- A NÉV ALATT: a részletes szerepkör (pl. "2.Üzletvezető helyettes")

NE a szekció címeket olvasd be munkavállalóként, csak az egyedi személyeket!
""",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "A munkavállaló teljes neve PONTOSAN."},
                    "role": {"type": "string", "description": "A szerepkör a név alatt (pl. 'Bolti dolgozó')."},
                },
                "required": ["name", "role"],
            },
        }
    },
    "required": ["employees"],
}

NOTICE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "A dokumentum legkiemelkedőbb, legnagyobb betűméretű címe."},
        "content": {"type": "string", "description": "A képen látható teljes szöveges tartalom, a cím nélkül."},
    },
    "required": ["title", "content"],
}

STRUCTURED_CONTENT_SCHEMA = {
    "type": "object",
    "properties": {
        "leading_description": {"type": "string"},
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {"key": {"type": "string"}, "value": {"type": "string"}},
                "required": ["key", "value"],
            },
        },
        "trailing_description": {"type": "string"},
    },
    "required": ["leading_description", "items", "trailing_description"],
}
