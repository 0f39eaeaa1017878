"""Consistency checks of true interaction records.

The records accept any content. This module flags the contents which break
the conventions consumers rely on, without modifying the records:
- Declared number of primaries which does not match the list of primaries
- Enumerated attributes which are unknown or outside of their vocabulary
- Struck nucleon codes in the reserved pair block which are not pair codes
- Charged-current interactions whose first primary is not a charged lepton
- Detector-frame and beam-frame attributes which share the same array

Typical configuration should look like:

.. code-block:: yaml

    validate:
      check_lepton: false
      strict: true
"""

from dataclasses import dataclass
from enum import IntEnum

from caftruth.errors import ValidationError
from caftruth.utils.logger import logger
from caftruth.utils.particles import (
    in_nucleon_pair_block,
    is_charged_lepton,
    is_nucleon_pair,
)

__all__ = ["ValidationIssue", "InteractionValidator", "validate_interactions"]


@dataclass
class ValidationIssue:
    """Single problem found in a record.

    Attributes
    ----------
    attr : str
        Name of the attribute the issue pertains to
    level : str
        Severity of the issue, one of `error` or `warning`
    message : str
        Description of the issue
    """

    attr: str
    level: str
    message: str

    def __str__(self):
        return f"[{self.level}] {self.attr}: {self.message}"


class InteractionValidator:
    """Checks true interaction records against the consumer conventions."""

    name = "interaction"

    def __init__(
        self,
        check_counts=True,
        check_enums=True,
        check_hitnuc=True,
        check_lepton=True,
        check_frames=True,
        strict=False,
    ):
        """Initialize the validator.

        Parameters
        ----------
        check_counts : bool, default True
            Check that `nprim` matches the length of `prim`
        check_enums : bool, default True
            Check that the enumerated attributes hold known tags
        check_hitnuc : bool, default True
            Check the struck nucleon codes in the reserved pair block
        check_lepton : bool, default True
            Check that the lepton comes first in charged-current interactions
        check_frames : bool, default True
            Check that frame-specific attributes do not share storage
        strict : bool, default False
            If `True`, raise when a record has error-level issues
        """
        self.check_counts = check_counts
        self.check_enums = check_enums
        self.check_hitnuc = check_hitnuc
        self.check_lepton = check_lepton
        self.check_frames = check_frames
        self.strict = strict

    def __call__(self, interaction):
        """Runs all the enabled checks on one record.

        Parameters
        ----------
        interaction : TrueInteraction
            Record to check

        Returns
        -------
        List[ValidationIssue]
            Issues found in the record, empty if it is consistent
        """
        issues = []
        if self.check_counts:
            issues.extend(self.count_issues(interaction))
        if self.check_enums:
            issues.extend(self.enum_issues(interaction))
        if self.check_hitnuc:
            issues.extend(self.hitnuc_issues(interaction))
        if self.check_lepton:
            issues.extend(self.lepton_issues(interaction))
        if self.check_frames:
            issues.extend(self.frame_issues(interaction))

        # Report
        for issue in issues:
            if issue.level == "error":
                logger.error("%s", issue)
            else:
                logger.warning("%s", issue)

        if self.strict and any(issue.level == "error" for issue in issues):
            raise ValidationError(issues)

        return issues

    @staticmethod
    def count_issues(interaction):
        """Checks that the declared number of primaries matches the list.

        Parameters
        ----------
        interaction : TrueInteraction
            Record to check

        Returns
        -------
        List[ValidationIssue]
            Issues found in the record
        """
        if interaction.nprim != len(interaction.prim):
            return [
                ValidationIssue(
                    "nprim",
                    "error",
                    f"Declares {interaction.nprim} primaries but holds "
                    f"{len(interaction.prim)}.",
                )
            ]

        return []

    @staticmethod
    def enum_issues(interaction):
        """Checks that the enumerated attributes hold known tags.

        Parameters
        ----------
        interaction : TrueInteraction
            Record to check

        Returns
        -------
        List[ValidationIssue]
            Issues found in the record
        """
        issues = []
        for attr, enum in interaction.enum_attrs.items():
            value = getattr(interaction, attr)
            if not isinstance(value, IntEnum):
                issues.append(
                    ValidationIssue(
                        attr,
                        "error",
                        f"Value {value} is not part of the {enum.__name__} "
                        "vocabulary.",
                    )
                )
            elif value == enum.UNKNOWN:
                issues.append(
                    ValidationIssue(attr, "warning", f"Unknown {enum.__name__}.")
                )

        return issues

    @staticmethod
    def hitnuc_issues(interaction):
        """Checks the struck nucleon codes which live in the pair block.

        Parameters
        ----------
        interaction : TrueInteraction
            Record to check

        Returns
        -------
        List[ValidationIssue]
            Issues found in the record
        """
        code = interaction.hitnuc
        if in_nucleon_pair_block(code) and not is_nucleon_pair(code):
            return [
                ValidationIssue(
                    "hitnuc",
                    "error",
                    f"Code {code} is reserved for nucleon pairs but is not "
                    "a known pair code.",
                )
            ]

        return []

    @staticmethod
    def lepton_issues(interaction):
        """Checks that the first primary of a CC interaction is a lepton.

        Parameters
        ----------
        interaction : TrueInteraction
            Record to check

        Returns
        -------
        List[ValidationIssue]
            Issues found in the record
        """
        if not interaction.iscc or not len(interaction.prim):
            return []

        pdg = interaction.prim[0].pdg
        if not is_charged_lepton(pdg):
            return [
                ValidationIssue(
                    "prim",
                    "warning",
                    f"Charged-current interaction whose first primary "
                    f"(PDG {pdg}) is not a charged lepton.",
                )
            ]

        return []

    @staticmethod
    def frame_issues(interaction):
        """Checks that detector-frame and beam-frame attributes are distinct.

        Parameters
        ----------
        interaction : TrueInteraction
            Record to check

        Returns
        -------
        List[ValidationIssue]
            Issues found in the record
        """
        issues = []
        for det_attr in interaction.pos_attrs + interaction.vec_attrs:
            for beam_attr in interaction.beam_attrs:
                det_value = getattr(interaction, det_attr)
                beam_value = getattr(interaction, beam_attr)
                if det_value is beam_value:
                    issues.append(
                        ValidationIssue(
                            beam_attr,
                            "warning",
                            f"Shares its storage with `{det_attr}` (detector "
                            "frame) although it is expressed in the beam frame.",
                        )
                    )

        return issues


def validate_interactions(interactions, **kwargs):
    """Validates a collection of true interaction records.

    Parameters
    ----------
    interactions : Iterable[TrueInteraction]
        Records to check
    **kwargs : dict, optional
        Parameters passed to :class:`InteractionValidator`

    Returns
    -------
    Dict[int, List[ValidationIssue]]
        Issues of each record which has any, keyed by record index
    """
    validator = InteractionValidator(**kwargs)
    issues, num_records = {}, 0
    for i, interaction in enumerate(interactions):
        num_records += 1
        record_issues = validator(interaction)
        if record_issues:
            issues[i] = record_issues

    logger.info("Found issues in %d record(s) out of %d.", len(issues), num_records)

    return issues
