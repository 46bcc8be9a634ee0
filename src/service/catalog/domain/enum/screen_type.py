from enum import StrEnum


class ScreenType(StrEnum):
    STANDARD = '2D'
    THREE_D = '3D'
    FOUR_DX = '4DX'
    IMAX = 'IMAX'
    SCREEN_X = 'SCREENX'
    DOLBY_CINEMA = 'DOLBY_CINEMA'
