"""Built-in exercise library.

Each unit is tagged with target areas, required equipment, difficulty and
style tags. Style tags are what workout types resolve to (see catalog.py).
"""

from __future__ import annotations

from dataclasses import dataclass

from workout_engine.profiles.models import FitnessLevel


@dataclass(frozen=True)
class ContentUnit:
    id: str
    name: str
    target_areas: frozenset[str]
    equipment: frozenset[str]
    difficulty: FitnessLevel
    styles: frozenset[str]
    instructions: str
    modification: str | None = None
    rep_range: tuple[int, int] | None = None
    set_range: tuple[int, int] | None = None
    duration_seconds: int | None = None
    rest_seconds: int | None = None


def _unit(
    id: str,
    name: str,
    areas: str,
    equipment: str,
    difficulty: str,
    styles: str,
    instructions: str,
    modification: str | None = None,
    reps: tuple[int, int] | None = None,
    sets: tuple[int, int] | None = None,
    duration: int | None = None,
    rest: int | None = None,
) -> ContentUnit:
    return ContentUnit(
        id=id,
        name=name,
        target_areas=frozenset(areas.split()),
        equipment=frozenset(equipment.split()),
        difficulty=FitnessLevel(difficulty),
        styles=frozenset(styles.split()),
        instructions=instructions,
        modification=modification,
        rep_range=reps,
        set_range=sets,
        duration_seconds=duration,
        rest_seconds=rest,
    )


EXERCISE_LIBRARY: tuple[ContentUnit, ...] = (
    # HIIT / cardio
    _unit(
        "jumping_jacks", "Jumping Jacks", "full-body cardio", "bodyweight", "beginner", "hiit cardio warmup",
        "Jump feet apart while raising arms overhead, then jump back to starting position",
        "Step side to side instead of jumping", reps=(20, 40), sets=(3, 5), duration=30, rest=15,
    ),
    _unit(
        "mountain_climbers", "Mountain Climbers", "core shoulders cardio", "bodyweight", "intermediate", "hiit cardio core",
        "Start in plank position, alternate bringing knees to chest rapidly",
        "Slow the pace or step feet instead of running", reps=(20, 60), sets=(3, 4), duration=30, rest=20,
    ),
    _unit(
        "burpees", "Burpees", "full-body cardio", "bodyweight", "advanced", "hiit cardio strength full-body",
        "Squat down, jump back to plank, do push-up, jump feet forward, jump up with arms overhead",
        "Step back instead of jumping, skip the push-up", reps=(5, 15), sets=(3, 5), rest=30,
    ),
    _unit(
        "high_knees", "High Knees", "legs cardio", "bodyweight", "beginner", "hiit cardio warmup",
        "Run in place bringing knees up to hip level",
        "March in place with lower knee lift", reps=(30, 60), sets=(3, 4), duration=30, rest=15,
    ),
    _unit(
        "jump_squats", "Jump Squats", "quads glutes cardio", "bodyweight", "intermediate", "hiit cardio lower-body plyometric",
        "Drop into a deep squat then explode upward, landing softly",
        "Bodyweight squat with a calf raise at the top", reps=(10, 20), sets=(3, 4), rest=30,
    ),
    _unit(
        "skater_hops", "Skater Hops", "glutes legs cardio", "bodyweight", "intermediate", "hiit cardio",
        "Hop laterally from one foot to the other, swinging arms across the body",
        "Step laterally without the hop", reps=(16, 30), sets=(3, 4), duration=30, rest=20,
    ),
    _unit(
        "butt_kicks", "Butt Kicks", "hamstrings cardio", "bodyweight", "beginner", "cardio warmup",
        "Jog in place kicking heels toward glutes",
        "Walk in place curling one heel at a time", duration=30, sets=(2, 3), rest=15,
    ),
    _unit(
        "shadow_boxing", "Shadow Boxing", "shoulders core cardio", "bodyweight", "beginner", "cardio hiit",
        "Stay light on your feet and throw controlled straight punches and hooks at shoulder height",
        "Slow the pace and keep both feet planted", duration=45, sets=(3, 4), rest=20,
    ),
    _unit(
        "marching_in_place", "Marching in Place", "legs cardio", "bodyweight", "beginner", "cardio warmup recovery",
        "Stand tall and march at a steady rhythm, swinging arms naturally",
        "Hold a chair for balance", duration=60, sets=(1, 2), rest=15,
    ),
    _unit(
        "step_jacks", "Step Jacks", "full-body cardio", "bodyweight", "beginner", "cardio hiit warmup",
        "Step one foot out to the side while raising arms to shoulder height, return and alternate",
        "Keep arms at chest height", reps=(20, 30), sets=(2, 3), duration=30, rest=15,
    ),
    # Upper body
    _unit(
        "push_ups", "Push-ups", "chest shoulders triceps core", "bodyweight", "intermediate",
        "strength calisthenics upper-body push",
        "Start in plank position, lower chest to floor, push back up",
        "Knee push-ups or wall push-ups", reps=(8, 20), sets=(3, 4), rest=60,
    ),
    _unit(
        "incline_push_ups", "Incline Push-ups", "chest triceps", "bodyweight", "beginner",
        "strength calisthenics upper-body push",
        "Hands on a sturdy bench or counter, lower chest toward the edge and push back up",
        "Use a higher surface", reps=(8, 15), sets=(2, 3), rest=45,
    ),
    _unit(
        "pike_push_ups", "Pike Push-ups", "shoulders triceps core", "bodyweight", "intermediate",
        "strength calisthenics upper-body push",
        "Start in downward dog position, lower head toward floor, push back up",
        "Elevate hands on a step", reps=(5, 15), sets=(3, 4), rest=60,
    ),
    _unit(
        "tricep_dips", "Tricep Dips", "triceps shoulders", "bodyweight chair", "intermediate",
        "strength calisthenics upper-body push",
        "Sit on edge of chair, lower body by bending elbows, push back up",
        "Keep feet close to the chair", reps=(8, 15), sets=(3, 4), rest=60,
    ),
    _unit(
        "dumbbell_rows", "Dumbbell Rows", "back biceps", "dumbbells", "beginner", "strength upper-body pull",
        "Support one hand on a bench, pull the dumbbell to your hip keeping the elbow close",
        "Use a lighter weight", reps=(8, 12), sets=(3, 4), rest=60,
    ),
    _unit(
        "dumbbell_shoulder_press", "Dumbbell Shoulder Press", "shoulders triceps", "dumbbells", "intermediate",
        "strength upper-body push",
        "Press the dumbbells overhead from shoulder height, lower with control",
        "Seated with back support", reps=(8, 12), sets=(3, 4), rest=75,
    ),
    _unit(
        "dumbbell_bicep_curls", "Dumbbell Bicep Curls", "biceps", "dumbbells", "beginner", "strength upper-body pull",
        "Curl the dumbbells toward the shoulders keeping elbows pinned, lower slowly",
        "Alternate arms", reps=(10, 15), sets=(3, 3), rest=45,
    ),
    _unit(
        "band_pull_aparts", "Resistance Band Pull-Aparts", "upper-back shoulders", "resistance-bands", "beginner",
        "strength upper-body pull warmup",
        "Hold the band at chest height and pull it apart by squeezing the shoulder blades",
        "Use a lighter band", reps=(12, 20), sets=(2, 3), rest=30,
    ),
    _unit(
        "pull_ups", "Pull-ups", "back biceps", "pull-up-bar", "advanced", "strength calisthenics upper-body pull",
        "Hang from the bar and pull until the chin clears it, lower under control",
        "Band-assisted or negative-only reps", reps=(3, 10), sets=(3, 4), rest=90,
    ),
    _unit(
        "superman", "Superman Hold", "lower-back glutes", "bodyweight", "beginner", "strength core upper-body pull",
        "Lie face down and lift arms, chest and legs slightly off the floor, hold",
        "Lift arms only", duration=20, sets=(2, 3), rest=30,
    ),
    _unit(
        "plank_shoulder_taps", "Plank Shoulder Taps", "core shoulders", "bodyweight", "intermediate",
        "strength core upper-body calisthenics",
        "In high plank, tap each shoulder with the opposite hand keeping hips still",
        "Widen the feet or drop to knees", reps=(16, 30), sets=(3, 3), rest=30,
    ),
    # Lower body
    _unit(
        "squats", "Squats", "quads glutes hamstrings", "bodyweight", "beginner", "strength lower-body functional",
        "Stand with feet shoulder-width apart, lower hips back and down, return to standing",
        "Chair squats or partial range of motion", reps=(10, 25), sets=(3, 4), rest=45,
    ),
    _unit(
        "lunges", "Lunges", "quads glutes hamstrings calves", "bodyweight", "intermediate",
        "strength lower-body functional",
        "Step forward, lower back knee toward ground, return to standing",
        "Static split stance holding onto a wall", reps=(8, 15), sets=(3, 4), rest=45,
    ),
    _unit(
        "reverse_lunges", "Reverse Lunges", "quads glutes", "bodyweight", "beginner", "strength lower-body",
        "Step backward and lower the back knee, drive through the front heel to return",
        "Shorter step and shallower depth", reps=(8, 12), sets=(3, 3), rest=45,
    ),
    _unit(
        "glute_bridge", "Glute Bridge", "glutes hamstrings core", "bodyweight", "beginner",
        "strength lower-body glutes recovery",
        "Lie on back with knees bent, drive hips up by squeezing glutes, lower slowly",
        "Reduce the range of motion", reps=(12, 20), sets=(3, 3), rest=30,
    ),
    _unit(
        "single_leg_glute_bridge", "Single Leg Glute Bridge", "glutes hamstrings core", "bodyweight", "intermediate",
        "strength lower-body glutes",
        "Lie on back, lift one leg, bridge up with other leg",
        "Two-leg glute bridge", reps=(8, 15), sets=(3, 4), rest=30,
    ),
    _unit(
        "calf_raises", "Calf Raises", "calves", "bodyweight", "beginner", "strength lower-body",
        "Rise up onto toes, lower back down slowly",
        "Hold onto wall for balance", reps=(15, 25), sets=(3, 4), rest=30,
    ),
    _unit(
        "clamshells", "Clamshells", "glutes hips", "bodyweight", "beginner", "strength lower-body recovery",
        "Lie on your side with knees bent, open the top knee while keeping feet together",
        "Smaller range of motion", reps=(12, 20), sets=(2, 3), rest=20,
    ),
    _unit(
        "side_lying_leg_raises", "Side-Lying Leg Raises", "glutes hips", "bodyweight", "beginner", "strength lower-body",
        "Lie on your side and raise the top leg with a straight knee, lower slowly",
        "Bend the bottom knee for stability", reps=(12, 20), sets=(2, 3), rest=20,
    ),
    _unit(
        "wall_sit", "Wall Sit", "quads glutes", "bodyweight", "beginner", "strength lower-body isometric",
        "Slide down a wall until thighs are near parallel and hold",
        "Stay higher on the wall", duration=30, sets=(2, 3), rest=45,
    ),
    _unit(
        "goblet_squat", "Goblet Squat", "quads glutes core", "dumbbells", "intermediate", "strength lower-body",
        "Hold a dumbbell at the chest and sit into a deep squat, elbows inside knees",
        "Squat to a box", reps=(8, 12), sets=(3, 4), rest=60,
    ),
    _unit(
        "romanian_deadlift", "Dumbbell Romanian Deadlift", "hamstrings glutes lower-back", "dumbbells", "intermediate",
        "strength lower-body pull",
        "Hinge at the hips with soft knees, lower the dumbbells along the legs, stand tall",
        "Reduce the range of motion", reps=(8, 12), sets=(3, 4), rest=75,
    ),
    _unit(
        "step_ups", "Step-ups", "quads glutes", "bodyweight bench", "beginner", "strength lower-body functional",
        "Step onto a bench with one foot, drive up to standing, step down with control",
        "Use a lower step", reps=(8, 12), sets=(3, 3), rest=45,
    ),
    _unit(
        "pistol_squat", "Pistol Squat", "quads glutes core", "bodyweight", "advanced", "calisthenics lower-body",
        "Balance on one leg and lower into a deep squat with the other leg extended",
        "Sit to a box on one leg", reps=(3, 8), sets=(3, 4), rest=90,
    ),
    # Core
    _unit(
        "plank", "Plank", "core shoulders", "bodyweight", "beginner", "strength core isometric calisthenics",
        "Hold straight line from head to heels, engage core",
        "Knee plank or wall plank", duration=60, sets=(3, 4), rest=30,
    ),
    _unit(
        "dead_bug", "Dead Bug", "core", "bodyweight", "beginner", "core strength recovery",
        "Lie on back with arms up and knees bent, lower opposite arm and leg while keeping the low back down",
        "Move only the legs", reps=(10, 16), sets=(2, 3), rest=30,
    ),
    _unit(
        "bird_dog", "Bird Dog", "core lower-back glutes", "bodyweight", "beginner", "core mobility recovery",
        "On hands and knees, extend opposite arm and leg, hold, return and switch",
        "Extend legs only", reps=(10, 16), sets=(2, 3), rest=30,
    ),
    _unit(
        "bicycle_crunches", "Bicycle Crunches", "core obliques", "bodyweight", "intermediate", "core hiit",
        "Lie on back, bring opposite elbow toward knee while extending the other leg",
        "Keep feet on the floor", reps=(16, 30), sets=(3, 3), rest=30,
    ),
    _unit(
        "russian_twists", "Russian Twists", "core obliques", "bodyweight", "intermediate", "core strength",
        "Sit with feet lifted, twist the torso side to side touching the floor",
        "Keep heels on the floor", reps=(16, 30), sets=(3, 3), rest=30,
    ),
    _unit(
        "side_plank", "Side Plank", "core obliques shoulders", "bodyweight", "intermediate", "core strength isometric",
        "Support on one forearm with hips stacked and lifted, hold",
        "Bottom knee down", duration=30, sets=(2, 3), rest=30,
    ),
    _unit(
        "hollow_hold", "Hollow Body Hold", "core", "bodyweight", "advanced", "core calisthenics",
        "Lie on back, press low back down and hold arms and legs just off the floor",
        "Tuck the knees", duration=30, sets=(3, 4), rest=30,
    ),
    # Full body
    _unit(
        "bear_crawl", "Bear Crawl", "full-body core shoulders", "bodyweight", "intermediate",
        "full-body calisthenics conditioning",
        "On hands and feet with knees hovering, crawl forward moving opposite hand and foot",
        "Hold the bear position without moving", duration=30, sets=(3, 3), rest=30,
    ),
    _unit(
        "inchworms", "Inchworms", "full-body hamstrings shoulders", "bodyweight", "beginner",
        "full-body warmup mobility",
        "From standing, fold forward and walk hands out to plank, walk hands back and stand",
        "Bend the knees as needed", reps=(5, 10), sets=(2, 3), rest=30,
    ),
    _unit(
        "squat_to_press", "Dumbbell Squat to Press", "full-body quads shoulders", "dumbbells", "intermediate",
        "full-body strength",
        "Squat with dumbbells at the shoulders, drive up and press them overhead",
        "Squat only", reps=(8, 12), sets=(3, 4), rest=60,
    ),
    _unit(
        "kettlebell_swings", "Kettlebell Swings", "full-body glutes hamstrings", "kettlebell", "intermediate",
        "full-body hiit strength",
        "Hinge and swing the kettlebell to chest height using hip drive",
        "Kettlebell deadlift", reps=(12, 20), sets=(3, 4), rest=45,
    ),
    _unit(
        "renegade_rows", "Renegade Rows", "full-body back core", "dumbbells", "advanced", "full-body strength",
        "In plank on dumbbells, row one dumbbell to the hip, alternate",
        "Widen feet or drop knees", reps=(8, 12), sets=(3, 3), rest=60,
    ),
    _unit(
        "squat_and_reach", "Bodyweight Squat and Reach", "full-body quads", "bodyweight", "beginner",
        "full-body functional warmup",
        "Squat to comfortable depth, stand and reach arms forward at chest height",
        "Partial range of motion", reps=(10, 15), sets=(2, 3), rest=30,
    ),
    # Yoga / flexibility / mobility
    _unit(
        "downward_dog", "Downward Facing Dog", "shoulders hamstrings calves", "bodyweight", "beginner",
        "yoga flexibility cooldown",
        "Start on hands and knees, lift hips up and back forming inverted V",
        "Bend knees or use forearms", duration=60, sets=(1, 3), rest=15,
    ),
    _unit(
        "warrior_pose", "Warrior I Pose", "legs core shoulders", "bodyweight", "beginner", "yoga flexibility balance",
        "Step one foot back, front knee bent, arms reach overhead",
        "Use wall for balance", duration=45, sets=(1, 2), rest=15,
    ),
    _unit(
        "child_pose", "Child's Pose", "back hips", "bodyweight", "beginner", "yoga flexibility cooldown recovery",
        "Kneel and sit back on heels, reach arms forward on ground",
        "Place pillow under forehead", duration=60, sets=(1, 1), rest=0,
    ),
    _unit(
        "cat_cow", "Cat-Cow", "spine back core", "bodyweight", "beginner", "yoga mobility warmup recovery",
        "On hands and knees, alternate arching and rounding the spine with the breath",
        "Smaller range of motion", reps=(8, 12), sets=(1, 2), rest=0,
    ),
    _unit(
        "cobra", "Cobra Pose", "back chest", "bodyweight", "beginner", "yoga flexibility",
        "Lie face down, press through the hands to lift the chest while hips stay down",
        "Stay on forearms (sphinx)", duration=30, sets=(1, 2), rest=15,
    ),
    _unit(
        "seated_forward_fold", "Seated Forward Fold", "hamstrings lower-back", "bodyweight", "beginner",
        "yoga flexibility cooldown",
        "Sit with legs extended and forward bend from the hips toward the toes",
        "Bend the knees", duration=45, sets=(1, 2), rest=0,
    ),
    _unit(
        "supine_twist", "Supine Spinal Twist", "back hips", "bodyweight", "beginner", "yoga mobility cooldown",
        "Lie on back, drop both knees to one side for a gentle twist, switch sides",
        "Pillow under the knees", duration=45, sets=(1, 2), rest=0,
    ),
    _unit(
        "tree_pose", "Tree Pose", "legs core", "bodyweight", "beginner", "yoga balance",
        "Stand on one leg with the other foot on the calf or thigh, hands at the chest",
        "Toes on the floor beside the ankle", duration=30, sets=(1, 2), rest=10,
    ),
    _unit(
        "bridge_pose", "Bridge Pose", "glutes back", "bodyweight", "beginner", "yoga flexibility recovery",
        "Lie on back with knees bent, lift the hips and hold while breathing steadily",
        "Block under the sacrum", duration=30, sets=(1, 2), rest=15,
    ),
    _unit(
        "arm_circles", "Arm Circles", "shoulders", "bodyweight", "beginner", "warmup mobility",
        "Extend arms out to the sides and make small circles, gradually increasing size",
        "Smaller circles", duration=30, sets=(1, 2), rest=0,
    ),
    _unit(
        "leg_swings", "Leg Swings", "hips hamstrings", "bodyweight", "beginner", "warmup mobility",
        "Hold a wall and swing one leg forward and back in a controlled arc",
        "Smaller swings", reps=(10, 15), sets=(1, 2), rest=0,
    ),
    _unit(
        "hip_circles", "Hip Circles", "hips", "bodyweight", "beginner", "warmup mobility recovery",
        "Hands on hips, make slow circles with the hips in both directions",
        None, reps=(10, 10), sets=(1, 2), rest=0,
    ),
    _unit(
        "hamstring_stretch", "Standing Hamstring Stretch", "hamstrings", "bodyweight", "beginner",
        "cooldown flexibility",
        "Place heel on a low step and hinge forward with a flat back until a stretch is felt",
        "Keep the leg on the floor with heel forward", duration=60, sets=(1, 1), rest=0,
    ),
    _unit(
        "quad_stretch", "Standing Quad Stretch", "quads", "bodyweight", "beginner", "cooldown flexibility",
        "Stand tall and hold one ankle behind you, knees together",
        "Hold a wall for balance", duration=45, sets=(1, 1), rest=0,
    ),
    _unit(
        "chest_stretch", "Doorway Chest Stretch", "chest shoulders", "bodyweight", "beginner", "cooldown flexibility",
        "Forearms on a door frame at shoulder height, step through until the chest opens",
        "Lower the arms", duration=45, sets=(1, 1), rest=0,
    ),
    _unit(
        "deep_breathing", "Diaphragmatic Breathing", "core", "bodyweight", "beginner", "cooldown recovery mobility",
        "Lie or sit comfortably and breathe slowly into the belly, long exhale",
        None, duration=60, sets=(1, 1), rest=0,
    ),
)
