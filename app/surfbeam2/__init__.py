"""Everything specific to the ViaSat SurfBeam 2 modem and its outdoor unit (TRIA).

Only tested against firmware UT_3.7.8.9.5. Other firmware is likely to use a different number of fields per page;
see schema.py and the *_FIELD_COUNT env-vars.
"""
