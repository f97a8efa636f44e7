"""Bundled two-floor demo venue in the JSON layout format."""

from __future__ import annotations

from typing import Any

SAMPLE_LAYOUT_ID = "sandton_city_01"

SAMPLE_LAYOUT: dict[str, Any] = {
    "id": SAMPLE_LAYOUT_ID,
    "name": "Sandton City Shopping Centre",
    "floors": [
        {
            "level": 0,
            "name": "Ground Floor",
            "mapImageUrl": "https://example.com/sandton_ground_floor.png",
            "pois": [
                {"id": "g_entrance_1", "name": "Main Entrance 1", "type": "exit", "coordinates": {"x": 10, "y": 50, "level": 0}},
                {
                    "id": "g_store_a",
                    "name": "Fashion Store A",
                    "type": "store",
                    "coordinates": {"x": 22, "y": 46, "level": 0},
                    "storeDetails": {"category": "Fashion"},
                },
                {
                    "id": "g_store_b",
                    "name": "Electronics B",
                    "type": "store",
                    "coordinates": {"x": 26, "y": 50, "level": 0},
                    "storeDetails": {"category": "Electronics"},
                },
                {"id": "g_restroom_1", "name": "Restrooms G1", "type": "restroom", "coordinates": {"x": 24, "y": 58, "level": 0}},
                {"id": "g_elevator_1", "name": "Elevator E1", "type": "elevator", "coordinates": {"x": 30, "y": 50, "level": 0}},
                {
                    "id": "g_escalator_up_1",
                    "name": "Escalator Up EU1",
                    "type": "escalator",
                    "coordinates": {"x": 33, "y": 53, "level": 0},
                },
            ],
            "paths": [
                {"id": "pg_e1_sa", "fromPOIId": "g_entrance_1", "toPOIId": "g_store_a", "distance": 15, "type": "walkway", "isAccessible": True},
                {"id": "pg_e1_sb", "fromPOIId": "g_entrance_1", "toPOIId": "g_store_b", "distance": 20, "type": "walkway", "isAccessible": True},
                {"id": "pg_sa_r1", "fromPOIId": "g_store_a", "toPOIId": "g_restroom_1", "distance": 30, "type": "walkway", "isAccessible": True},
                {"id": "pg_sb_r1", "fromPOIId": "g_store_b", "toPOIId": "g_restroom_1", "distance": 10, "type": "walkway", "isAccessible": True},
                {"id": "pg_sa_el1", "fromPOIId": "g_store_a", "toPOIId": "g_elevator_1", "distance": 10, "type": "walkway", "isAccessible": True},
                {"id": "pg_sb_el1", "fromPOIId": "g_store_b", "toPOIId": "g_elevator_1", "distance": 5, "type": "walkway", "isAccessible": True},
                {"id": "pg_el1_esc1", "fromPOIId": "g_elevator_1", "toPOIId": "g_escalator_up_1", "distance": 5, "type": "walkway", "isAccessible": True},
            ],
        },
        {
            "level": 1,
            "name": "Level 1",
            "mapImageUrl": "https://example.com/sandton_level_1.png",
            "pois": [
                {
                    "id": "l1_store_c",
                    "name": "Bookstore C",
                    "type": "store",
                    "coordinates": {"x": 22, "y": 42, "level": 1},
                    "storeDetails": {"category": "Books"},
                },
                {
                    "id": "l1_food_court",
                    "name": "Food Court",
                    "type": "store",
                    "coordinates": {"x": 40, "y": 50, "level": 1},
                    "storeDetails": {"category": "Food"},
                },
                {"id": "l1_elevator_1", "name": "Elevator E1", "type": "elevator", "coordinates": {"x": 30, "y": 50, "level": 1}},
                {
                    "id": "l1_escalator_down_1",
                    "name": "Escalator Down ED1",
                    "type": "escalator",
                    "coordinates": {"x": 37, "y": 53, "level": 1},
                },
                {
                    "id": "l1_escalator_up_2",
                    "name": "Escalator Up EU2",
                    "type": "escalator",
                    "coordinates": {"x": 19, "y": 39, "level": 1},
                },
            ],
            "paths": [
                {"id": "pl1_el1_sc", "fromPOIId": "l1_elevator_1", "toPOIId": "l1_store_c", "distance": 12, "type": "walkway", "isAccessible": True},
                {"id": "pl1_el1_fc", "fromPOIId": "l1_elevator_1", "toPOIId": "l1_food_court", "distance": 10, "type": "walkway", "isAccessible": True},
                {"id": "pl1_sc_fc", "fromPOIId": "l1_store_c", "toPOIId": "l1_food_court", "distance": 25, "type": "walkway", "isAccessible": True},
                {"id": "pl1_escd1_fc", "fromPOIId": "l1_escalator_down_1", "toPOIId": "l1_food_court", "distance": 5, "type": "walkway", "isAccessible": True},
                {"id": "pl1_sc_escu2", "fromPOIId": "l1_store_c", "toPOIId": "l1_escalator_up_2", "distance": 5, "type": "walkway", "isAccessible": True},
                # Inter-floor transitions anchored on this floor.
                {
                    "id": "p_g_el1_l1_el1",
                    "fromPOIId": "g_elevator_1",
                    "toPOIId": "l1_elevator_1",
                    "distance": 0,
                    "type": "elevator",
                    "isAccessible": True,
                },
                {
                    "id": "p_g_escu1_l1_escd1",
                    "fromPOIId": "g_escalator_up_1",
                    "toPOIId": "l1_escalator_down_1",
                    "distance": 15,
                    "type": "escalator",
                    "isAccessible": False,
                },
            ],
        },
    ],
}
