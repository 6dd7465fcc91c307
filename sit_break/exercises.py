"""Exercise pools per body part, and the sedentary recovery routines."""
from __future__ import annotations
import random
from typing import Callable, Optional, Sequence

# ─── Part Exercises ───────────────────────────────────────────
# (id, title, how-to)
EXERCISES = {
    "neck": [
        ("neck_tuck", "Chin Tucks", "Retract chin horizontally like making a double chin. Hold 5s."),
        ("neck_tilt", "Neck Tilt", "Gently tilt head to one side using hand weight. Hold 15s."),
        ("neck_rotate", "Slow Rotations", "Rotate head left and right in slow motion, pause at stiff spots."),
        ("neck_iso_front", "Front Isometric", "Palm on forehead, push gently forward for 5s."),
        ("neck_iso_back", "Back Isometric", "Hands behind head, press back gently for 5s."),
        ("neck_yf", "Sky Gazer", "Look up slowly and open the chest, return to neutral."),
    ],
    "shoulder": [
        ("sh_shrugs", "Drop Shrugs", "Lift shoulders to ears, hold 3s, drop and relax."),
        ("sh_circles", "Elbow Circles", "Fingertips on shoulders, draw big circles with the elbows."),
        ("sh_w", "W Squeeze", "Arms in a W, squeeze shoulder blades down and back."),
        ("sh_wall", "Wall Angels", "Back to the wall, slide arms up and down slowly."),
        ("sh_door", "Doorway Stretch", "Forearms on a door frame, lean through gently."),
        ("sh_eagle", "Eagle Arms", "Wrap arms, lift elbows to shoulder height, breathe."),
    ],
    "lower-back": [
        ("bk_mckenzie", "McKenzie Ext", "Stand, hands on lower back, lean back gently."),
        ("bk_cat", "Seated Cat-Cow", "Round and arch the spine slowly while seated."),
        ("bk_twist", "Thoracic Twist", "Cross arms, rotate the upper back left and right."),
        ("bk_lat", "Side Bend", "Reach one arm overhead and lean to the side."),
        ("bk_hinge", "Hip Hinge", "Push hips back with a neutral spine, then stand tall."),
        ("bk_child", "Desk Traction", "Hands on the desk, walk back and let the spine lengthen."),
    ],
    "core": [
        ("cr_vacuum", "Stomach Vacuum", "Exhale fully, draw the navel in and hold 10s."),
        ("cr_brace", "Abdominal Brace", "Brace the midsection as if bracing for a poke, hold 10s."),
        ("cr_leg_lift", "Seated Leg Lift", "Sit tall, lift both feet an inch off the floor."),
        ("cr_press", "Hand-Knee Press", "Lift one knee and press against it with the opposite hand."),
        ("cr_rotate", "Seated Twist", "Rotate the torso slowly with hands crossed on the chest."),
        ("cr_plank_desk", "Desk Plank", "Forearms on the desk, body in a straight line, hold."),
    ],
    "gluteal": [
        ("gl_squeeze", "Chair Squeeze", "Squeeze the glutes hard for 5s while seated."),
        ("gl_kick", "Straight Kickback", "Hold the desk, extend one leg straight back."),
        ("gl_abduct", "Side Leg Raise", "Standing, lift one leg out to the side and lower."),
        ("gl_squat", "Air Squat", "Feet shoulder width, sit back and stand up."),
        ("gl_lunge", "Reverse Lunge", "Step back into a lunge, return to standing."),
        ("gl_hip_thrust", "Standing Hip Thrust", "Drive the hips forward and squeeze at the top."),
    ],
    "leg": [
        ("lg_calf", "Calf Raises", "Rise onto the toes and lower slowly."),
        ("lg_quad", "Quad Stretch", "Hold one ankle behind you, knees together."),
        ("lg_ham", "Hamstring Stretch", "Heel on the floor, hinge forward over the straight leg."),
        ("lg_sit_ext", "Seated Knee Ext", "Straighten one knee and hold 3s while seated."),
        ("lg_march", "High Knees March", "March in place, lifting the knees high."),
        ("lg_wall_sit", "Wall Sit", "Slide down a wall to a comfortable bend and hold."),
    ],
}

PART_POOL_SIZE = 6   # the exercise flow only draws from the first few of each part

# ─── Sedentary Recovery Routines ──────────────────────────────
RECOVERY_ROUTINES = [
    {
        "id": "sed-1",
        "title": "Stand, stretch and breathe",
        "duration": 45,
        "steps": ["Stand and raise both arms", "Lift the chest on the inhale, relax on the exhale",
                  "Repeat for 5 breaths"],
    },
    {
        "id": "sed-2",
        "title": "Ankle pumps",
        "duration": 30,
        "steps": ["Stand holding the desk", "Lift the toes, then press them down", "20 reps"],
    },
    {
        "id": "sed-3",
        "title": "Neck and shoulder reset",
        "duration": 40,
        "steps": ["Tuck the chin slightly", "Squeeze shoulder blades back and down for 3s",
                  "Relax and repeat 8 times"],
    },
]

Chooser = Callable[[Sequence], object]


def part_exercises(part: str) -> list[tuple[str, str, str]]:
    return EXERCISES.get(part, [])[:PART_POOL_SIZE]


def pick_exercise(part: str, choice: Chooser = random.choice) -> Optional[tuple[str, str, str]]:
    """Random exercise for ``part``, or None when the part has no exercises."""
    pool = part_exercises(part)
    return choice(pool) if pool else None


def pick_recovery_routine(choice: Chooser = random.choice) -> dict:
    return choice(RECOVERY_ROUTINES)
