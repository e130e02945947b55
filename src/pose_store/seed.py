"""Seed catalog — a starter set of common poses.

Hold durations are defaults in seconds; practitioners override them per
entry. Mountain and Savasana are tagged as the opening and closing
anchors.
"""

from __future__ import annotations

from sequence_engine.models.enums import AnchorRole, Category, DifficultyLevel
from sequence_engine.models.segment import Segment

_B = DifficultyLevel.BEGINNER
_I = DifficultyLevel.INTERMEDIATE
_A = DifficultyLevel.ADVANCED

DEFAULT_POSES: tuple[Segment, ...] = (
    Segment(
        segment_id="mountain",
        name="Mountain Pose",
        category=Category.STANDING,
        difficulty=_B,
        duration_seconds=60,
        description="Stand tall with feet grounded and arms by your sides.",
        instructions="Root through all four corners of the feet and lengthen the spine.",
        benefits="Improves posture and body awareness.",
        role=AnchorRole.OPENING,
    ),
    Segment(
        segment_id="cat-cow",
        name="Cat-Cow",
        category=Category.CORE,
        difficulty=_B,
        duration_seconds=90,
        description="Flow between rounding and arching the spine on hands and knees.",
        instructions="Inhale into cow, exhale into cat, moving with the breath.",
        benefits="Warms the spine and connects breath to movement.",
    ),
    Segment(
        segment_id="childs-pose",
        name="Child's Pose",
        category=Category.FORWARD_FOLD,
        difficulty=_B,
        duration_seconds=60,
        description="Kneel and fold forward with arms extended or by the sides.",
        instructions="Sink the hips toward the heels and rest the forehead down.",
        benefits="Gently stretches the back and hips.",
        precautions="Widen the knees if the belly needs room.",
    ),
    Segment(
        segment_id="downward-dog",
        name="Downward-Facing Dog",
        category=Category.INVERSION,
        difficulty=_B,
        duration_seconds=60,
        description="Form an inverted V with hands and feet on the mat.",
        instructions="Press the floor away and lift the hips up and back.",
        benefits="Stretches hamstrings and calves, strengthens the shoulders.",
        precautions="Bend the knees if the hamstrings are tight.",
    ),
    Segment(
        segment_id="warrior-1",
        name="Warrior I",
        category=Category.STANDING,
        difficulty=_I,
        duration_seconds=45,
        description="Lunge with the back heel down and arms reaching overhead.",
        instructions="Square the hips forward and bend the front knee over the ankle.",
        benefits="Strengthens legs and opens the chest.",
    ),
    Segment(
        segment_id="warrior-2",
        name="Warrior II",
        category=Category.STANDING,
        difficulty=_I,
        duration_seconds=45,
        description="Wide stance with arms extended parallel to the floor.",
        instructions="Gaze over the front fingertips and keep the torso upright.",
        benefits="Builds stamina and strengthens the legs.",
    ),
    Segment(
        segment_id="triangle",
        name="Triangle Pose",
        category=Category.STANDING,
        difficulty=_I,
        duration_seconds=45,
        description="Straight-legged side bend reaching one hand toward the shin.",
        instructions="Lengthen both sides of the waist and stack the shoulders.",
        benefits="Stretches the hamstrings and side body.",
    ),
    Segment(
        segment_id="tree",
        name="Tree Pose",
        category=Category.BALANCE,
        difficulty=_B,
        duration_seconds=45,
        description="Balance on one leg with the other foot on the inner thigh or calf.",
        instructions="Press foot and leg into each other and fix the gaze.",
        benefits="Improves balance and focus.",
        precautions="Avoid placing the foot on the knee.",
    ),
    Segment(
        segment_id="eagle",
        name="Eagle Pose",
        category=Category.BALANCE,
        difficulty=_I,
        duration_seconds=30,
        description="Wrap arms and legs while sitting back on one leg.",
        instructions="Squeeze the midline and keep the hips level.",
        benefits="Strengthens ankles and opens the upper back.",
    ),
    Segment(
        segment_id="half-moon",
        name="Half Moon",
        category=Category.BALANCE,
        difficulty=_A,
        duration_seconds=30,
        description="Balance on one hand and one foot with the body open to the side.",
        instructions="Stack the hips and flex the lifted foot.",
        benefits="Builds strength and coordination.",
    ),
    Segment(
        segment_id="cobra",
        name="Cobra Pose",
        category=Category.BACKBEND,
        difficulty=_B,
        duration_seconds=30,
        description="Lift the chest from the floor while lying on the belly.",
        instructions="Draw the shoulders back and keep the elbows soft.",
        benefits="Strengthens the spine and opens the chest.",
        precautions="Keep the lift low if the lower back is sensitive.",
    ),
    Segment(
        segment_id="bridge",
        name="Bridge Pose",
        category=Category.BACKBEND,
        difficulty=_I,
        duration_seconds=45,
        description="Lift the hips from a supine position with feet planted.",
        instructions="Press through the feet and roll the shoulders under.",
        benefits="Opens the hip flexors and strengthens the glutes.",
    ),
    Segment(
        segment_id="wheel",
        name="Wheel Pose",
        category=Category.BACKBEND,
        difficulty=_A,
        duration_seconds=30,
        description="Full backbend pressing up onto hands and feet.",
        instructions="Straighten the arms and lift the heart toward the wall behind.",
        benefits="Deeply opens the front body.",
        precautions="Skip with wrist or shoulder injuries.",
    ),
    Segment(
        segment_id="seated-forward-fold",
        name="Seated Forward Fold",
        category=Category.FORWARD_FOLD,
        difficulty=_B,
        duration_seconds=60,
        description="Fold over straight legs while seated.",
        instructions="Hinge from the hips and lengthen the spine before folding.",
        benefits="Stretches the hamstrings and calms the mind.",
    ),
    Segment(
        segment_id="standing-forward-fold",
        name="Standing Forward Fold",
        category=Category.FORWARD_FOLD,
        difficulty=_B,
        duration_seconds=45,
        description="Hang forward from the hips with soft knees.",
        instructions="Let the head be heavy and hold opposite elbows.",
        benefits="Releases the back and hamstrings.",
    ),
    Segment(
        segment_id="seated-twist",
        name="Seated Spinal Twist",
        category=Category.TWIST,
        difficulty=_B,
        duration_seconds=45,
        description="Rotate the torso while seated with one knee bent across.",
        instructions="Lengthen on the inhale and twist on the exhale.",
        benefits="Mobilises the spine and aids digestion.",
    ),
    Segment(
        segment_id="revolved-chair",
        name="Revolved Chair",
        category=Category.TWIST,
        difficulty=_I,
        duration_seconds=30,
        description="Twist from chair pose hooking an elbow outside the knee.",
        instructions="Keep the knees level and press palms together.",
        benefits="Strengthens the legs and wrings out the spine.",
    ),
    Segment(
        segment_id="boat",
        name="Boat Pose",
        category=Category.CORE,
        difficulty=_I,
        duration_seconds=30,
        description="Balance on the sit bones with legs lifted.",
        instructions="Lift the chest and keep the spine long.",
        benefits="Strengthens the abdominals and hip flexors.",
    ),
    Segment(
        segment_id="pigeon",
        name="Pigeon Pose",
        category=Category.HIP_OPENER,
        difficulty=_I,
        duration_seconds=60,
        description="Front shin across the mat with the back leg extended.",
        instructions="Square the hips and fold forward if comfortable.",
        benefits="Opens the outer hip and hip flexors.",
        precautions="Use a block under the hip if it does not reach the floor.",
    ),
    Segment(
        segment_id="savasana",
        name="Savasana",
        category=Category.RELAXATION,
        difficulty=_B,
        duration_seconds=300,
        description="Lie flat on the back in complete rest.",
        instructions="Let the breath be natural and release all effort.",
        benefits="Integrates the practice and calms the nervous system.",
        role=AnchorRole.CLOSING,
    ),
)
