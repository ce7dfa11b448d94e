# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Tag name tables for vendor makernote directories

Only the commonly populated tags are named. Unnamed tags are still decoded
and reported under a generated "Unknown_0xNNNN" name.

Copyright 2025 DNAi inc.
"""

OLYMPUS_TAG_NAMES = {
    0x0000: "MakerNoteVersion",
    0x0001: "MinoltaCameraSettingsOld",
    0x0003: "MinoltaCameraSettings",
    0x0040: "CompressedImageSize",
    0x0081: "PreviewImageData",
    0x0088: "PreviewImageStart",
    0x0089: "PreviewImageLength",
    0x0100: "ThumbnailImage",
    0x0104: "BodyFirmwareVersion",
    0x0200: "SpecialMode",
    0x0201: "Quality",
    0x0202: "Macro",
    0x0203: "BWMode",
    0x0204: "DigitalZoom",
    0x0205: "FocalPlaneDiagonal",
    0x0206: "LensDistortionParams",
    0x0207: "CameraType",
    0x0208: "TextInfo",
    0x0209: "CameraID",
    0x020B: "EpsonImageWidth",
    0x020C: "EpsonImageHeight",
    0x020D: "EpsonSoftware",
    0x0E00: "PrintIM",
    0x0F00: "DataDump",
    0x1004: "FlashMode",
    0x100B: "FocusMode",
    0x100F: "SharpnessFactor",
    0x2010: "Equipment",
    0x2020: "CameraSettings",
    0x2030: "RawDevelopment",
    0x2031: "RawDevelopment2",
    0x2040: "ImageProcessing",
    0x2050: "FocusInfo",
}

NIKON_TYPE1_TAG_NAMES = {
    0x0002: "Nikon1Unknown1",
    0x0003: "Quality",
    0x0004: "ColorMode",
    0x0005: "ImageAdjustment",
    0x0006: "CCDSensitivity",
    0x0007: "WhiteBalance",
    0x0008: "Focus",
    0x0009: "Nikon1Unknown2",
    0x000A: "DigitalZoom",
    0x000B: "Converter",
    0x0F00: "Nikon1Unknown3",
}

NIKON_TYPE2_TAG_NAMES = {
    0x0001: "MakerNoteVersion",
    0x0002: "ISO",
    0x0003: "ColorMode",
    0x0004: "Quality",
    0x0005: "WhiteBalance",
    0x0006: "Sharpness",
    0x0007: "FocusMode",
    0x0008: "FlashSetting",
    0x0009: "FlashType",
    0x000B: "WhiteBalanceFineTune",
    0x000C: "WB_RBLevels",
    0x000D: "ProgramShift",
    0x000E: "ExposureDifference",
    0x0011: "PreviewIFD",
    0x0012: "FlashExposureComp",
    0x0013: "ISOSetting",
    0x0016: "ImageBoundary",
    0x0017: "ExternalFlashExposureComp",
    0x0018: "FlashExposureBracketValue",
    0x0019: "ExposureBracketValue",
    0x001B: "CropHiSpeed",
    0x001D: "SerialNumber",
    0x001E: "ColorSpace",
    0x0080: "ImageAdjustment",
    0x0081: "ToneComp",
    0x0082: "AuxiliaryLens",
    0x0083: "LensType",
    0x0084: "Lens",
    0x0085: "ManualFocusDistance",
    0x0086: "DigitalZoom",
    0x0087: "FlashMode",
    0x0088: "AFInfo",
    0x0089: "ShootingMode",
    0x008B: "LensFStops",
    0x008C: "ContrastCurve",
    0x0092: "HueAdjustment",
    0x0095: "NoiseReduction",
    0x00A7: "ShutterCount",
    0x0E00: "PrintIM",
    0x0E01: "NikonCaptureData",
}

SONY_TYPE1_TAG_NAMES = {
    0x0010: "CameraInfo",
    0x0020: "FocusInfo",
    0x0102: "Quality",
    0x0104: "FlashExposureComp",
    0x0105: "Teleconverter",
    0x0112: "WhiteBalanceFineTune",
    0x0114: "CameraSettings",
    0x0115: "WhiteBalance",
    0x0116: "ExtraInfo",
    0x0E00: "PrintIM",
    0x1000: "MultiBurstMode",
    0x1001: "MultiBurstImageWidth",
    0x1002: "MultiBurstImageHeight",
    0xB020: "CreativeStyle",
    0xB021: "ColorTemperature",
    0xB040: "Macro",
    0xB041: "ExposureMode",
    0xB047: "JPEGQuality",
    0xB04B: "AntiBlur",
    0xB04F: "DynamicRangeOptimizer",
}

SONY_TYPE6_TAG_NAMES = {
    0x0513: "MakerNoteThumbOffset",
    0x0514: "MakerNoteThumbLength",
    0x0515: "SonyType6Unknown1",
    0x2000: "MakerNoteThumbVersion",
}

SIGMA_TAG_NAMES = {
    0x0002: "SerialNumber",
    0x0003: "DriveMode",
    0x0004: "ResolutionMode",
    0x0005: "AFMode",
    0x0006: "FocusSetting",
    0x0007: "WhiteBalance",
    0x0008: "ExposureMode",
    0x0009: "MeteringMode",
    0x000A: "LensFocalRange",
    0x000B: "ColorSpace",
    0x000C: "ExposureCompensation",
    0x000D: "Contrast",
    0x000E: "Shadow",
    0x000F: "Highlight",
    0x0010: "Saturation",
    0x0011: "Sharpness",
    0x0012: "X3FillLight",
    0x0014: "ColorAdjustment",
    0x0015: "AdjustmentMode",
    0x0016: "Quality",
    0x0017: "Firmware",
    0x0018: "Software",
    0x0019: "AutoBracket",
}

CANON_TAG_NAMES = {
    0x0001: "CanonCameraSettings",
    0x0002: "CanonFocalLength",
    0x0004: "CanonShotInfo",
    0x0005: "CanonPanorama",
    0x0006: "CanonImageType",
    0x0007: "CanonFirmwareVersion",
    0x0008: "FileNumber",
    0x0009: "OwnerName",
    0x000C: "SerialNumber",
    0x000D: "CanonCameraInfo",
    0x000E: "CanonFileLength",
    0x000F: "CustomFunctions",
    0x0010: "CanonModelID",
    0x0011: "MovieInfo",
    0x0012: "CanonAFInfo",
    0x0013: "ThumbnailImageValidArea",
    0x0015: "SerialNumberFormat",
    0x001A: "SuperMacro",
    0x001C: "DateStampMode",
    0x001D: "MyColors",
    0x001E: "FirmwareRevision",
    0x0023: "Categories",
    0x0026: "CanonAFInfo2",
    0x0083: "OriginalDecisionDataOffset",
    0x0093: "CanonFileInfo",
    0x0095: "LensModel",
    0x0096: "InternalSerialNumber",
    0x0097: "DustRemovalData",
    0x00A0: "ProcessingInfo",
    0x00AA: "MeasuredColor",
    0x00B4: "ColorSpace",
    0x00D0: "VRDOffset",
    0x00E0: "SensorInfo",
    0x4001: "ColorData",
}

CASIO_TYPE1_TAG_NAMES = {
    0x0001: "RecordingMode",
    0x0002: "Quality",
    0x0003: "FocusMode",
    0x0004: "FlashMode",
    0x0005: "FlashIntensity",
    0x0006: "ObjectDistance",
    0x0007: "WhiteBalance",
    0x000A: "DigitalZoom",
    0x000B: "Sharpness",
    0x000C: "Contrast",
    0x000D: "Saturation",
    0x0014: "ISO",
    0x0015: "FirmwareDate",
    0x0016: "Enhancement",
    0x0017: "ColorFilter",
    0x0018: "AFPoint",
    0x0019: "FlashIntensity2",
}

CASIO_TYPE2_TAG_NAMES = {
    0x0002: "PreviewImageSize",
    0x0003: "PreviewImageLength",
    0x0004: "PreviewImageStart",
    0x0008: "QualityMode",
    0x0009: "CasioImageSize",
    0x000D: "FocusMode",
    0x0014: "ISO",
    0x0019: "WhiteBalance",
    0x001D: "FocalLength",
    0x001F: "Saturation",
    0x0020: "Contrast",
    0x0021: "Sharpness",
    0x0E00: "PrintIM",
    0x2000: "PreviewImage",
    0x2001: "FirmwareDate",
    0x2011: "WhiteBalanceBias",
    0x2012: "WhiteBalance2",
    0x2022: "ObjectDistance",
    0x2034: "FlashDistance",
    0x3000: "RecordMode",
    0x3001: "ReleaseMode",
    0x3002: "Quality",
    0x3003: "FocusMode2",
    0x3006: "HometownCity",
    0x3007: "BestShotMode",
    0x3014: "CCDISOSensitivity",
    0x3015: "ColorMode",
    0x3016: "Enhancement",
    0x3017: "ColorFilter",
}

FUJIFILM_TAG_NAMES = {
    0x0000: "Version",
    0x0010: "InternalSerialNumber",
    0x1000: "Quality",
    0x1001: "Sharpness",
    0x1002: "WhiteBalance",
    0x1003: "Saturation",
    0x1004: "Tone",
    0x1005: "ColorTemperature",
    0x1006: "Contrast",
    0x100A: "WhiteBalanceFineTune",
    0x100B: "NoiseReduction",
    0x100E: "HighISONoiseReduction",
    0x1010: "FujiFlashMode",
    0x1011: "FlashExposureComp",
    0x1020: "Macro",
    0x1021: "FocusMode",
    0x1022: "AFMode",
    0x1023: "FocusPixel",
    0x1030: "SlowSync",
    0x1031: "PictureMode",
    0x1032: "ExposureCount",
    0x1100: "AutoBracketing",
    0x1101: "SequenceNumber",
    0x1210: "ColorMode",
    0x1300: "BlurWarning",
    0x1301: "FocusWarning",
    0x1302: "ExposureWarning",
    0x1400: "DynamicRange",
    0x1401: "FilmMode",
    0x1402: "DynamicRangeSetting",
    0x1403: "DevelopmentDynamicRange",
    0x1404: "MinFocalLength",
    0x1405: "MaxFocalLength",
    0x1406: "MaxApertureAtMinFocal",
    0x1407: "MaxApertureAtMaxFocal",
    0x1422: "ImageStabilization",
    0x8000: "FileSource",
    0x8002: "OrderNumber",
    0x8003: "FrameNumber",
    0xB211: "Parallax",
}

# Kodak makernotes hold values at fixed positions; the tag id is the
# position of the value after the 8-byte header.
KODAK_TAG_NAMES = {
    0: "KodakModel",
    9: "Quality",
    10: "BurstMode",
    12: "ImageWidth",
    14: "ImageHeight",
    16: "YearCreated",
    18: "MonthDayCreated",
    20: "TimeCreated",
    24: "BurstMode2",
    27: "ShutterMode",
    28: "MeteringMode",
    29: "SequenceNumber",
    30: "FNumber",
    32: "ExposureTime",
    36: "ExposureCompensation",
    56: "FocusMode",
    64: "WhiteBalance",
    92: "FlashMode",
    93: "FlashFired",
    94: "ISOSetting",
    96: "ISO",
    98: "TotalZoom",
    100: "DateTimeStamp",
    102: "ColorMode",
    104: "DigitalZoom",
    107: "Sharpness",
}

KYOCERA_TAG_NAMES = {
    0x0001: "ThumbnailImage",
    0x0E00: "PrintIM",
}

LEICA_TAG_NAMES = {
    0x0300: "Quality",
    0x0302: "UserProfile",
    0x0303: "SerialNumber",
    0x0304: "WhiteBalance",
    0x0310: "LensType",
    0x0311: "ExternalSensorBrightnessValue",
    0x0312: "MeasuredLV",
    0x0313: "ApproximateFNumber",
    0x0320: "CameraTemperature",
    0x0321: "ColorTemperature",
    0x0322: "WBRedLevel",
    0x0323: "WBGreenLevel",
    0x0324: "WBBlueLevel",
    0x0330: "CCDVersion",
    0x0331: "CCDBoardVersion",
    0x0332: "ControllerBoardVersion",
    0x0333: "M16CVersion",
    0x0340: "ImageIDNumber",
}

PANASONIC_TAG_NAMES = {
    0x0001: "ImageQuality",
    0x0002: "FirmwareVersion",
    0x0003: "WhiteBalance",
    0x0007: "FocusMode",
    0x000F: "AFAreaMode",
    0x001A: "ImageStabilization",
    0x001C: "MacroMode",
    0x001F: "ShootingMode",
    0x0020: "Audio",
    0x0021: "DataDump",
    0x0022: "EasyMode",
    0x0023: "WhiteBalanceBias",
    0x0024: "FlashBias",
    0x0025: "InternalSerialNumber",
    0x0026: "PanasonicExifVersion",
    0x0028: "ColorEffect",
    0x0029: "TimeSincePowerOn",
    0x002A: "BurstMode",
    0x002B: "SequenceNumber",
    0x002C: "ContrastMode",
    0x002D: "NoiseReduction",
    0x002E: "SelfTimer",
    0x0030: "Rotation",
    0x0031: "AFAssistLamp",
    0x0032: "ColorMode",
    0x0033: "BabyAge",
    0x0034: "OpticalZoomMode",
    0x0035: "ConversionLens",
    0x0036: "TravelDay",
    0x0039: "Contrast",
    0x003A: "WorldTimeLocation",
    0x003B: "TextStamp",
    0x003C: "ProgramISO",
    0x0051: "LensType",
    0x0052: "LensSerialNumber",
    0x0053: "AccessoryType",
    0x0E00: "PrintIM",
    0x8000: "MakerNoteVersion",
    0x8001: "SceneMode",
    0x8004: "WBRedLevel",
    0x8005: "WBGreenLevel",
    0x8006: "WBBlueLevel",
    0x8010: "BabyAge",
}

PENTAX_TAG_NAMES = {
    0x0001: "PentaxModelType",
    0x0002: "Quality",
    0x0003: "FocusMode",
    0x0004: "FlashMode",
    0x0007: "WhiteBalance",
    0x000A: "DigitalZoom",
    0x000B: "Sharpness",
    0x000C: "Contrast",
    0x000D: "Saturation",
    0x0014: "ISO",
    0x0017: "Colour",
    0x0E00: "PrintIM",
    0x1000: "TimeZone",
    0x1001: "DaylightSavings",
}

SANYO_TAG_NAMES = {
    0x00FF: "MakerNoteOffset",
    0x0100: "SanyoThumbnail",
    0x0200: "SpecialMode",
    0x0201: "SanyoQuality",
    0x0202: "Macro",
    0x0204: "DigitalZoom",
    0x0207: "SoftwareVersion",
    0x0208: "PictInfo",
    0x0209: "CameraID",
    0x020E: "SequentialShot",
    0x020F: "WideRange",
    0x0210: "ColorAdjustmentMode",
    0x0213: "QuickShot",
    0x0214: "SelfTimer",
    0x0216: "VoiceMemo",
    0x0217: "RecordShutterRelease",
    0x0218: "FlickerReduce",
    0x0219: "OpticalZoomOn",
    0x021B: "DigitalZoomOn",
    0x021D: "LightSourceSpecial",
    0x021E: "Resaved",
    0x021F: "SceneSelect",
    0x0223: "ManualFocusDistance",
    0x0224: "SequenceShotInterval",
    0x0225: "FlashMode",
    0x0E00: "PrintIM",
    0x0F00: "DataDump",
}

RICOH_TAG_NAMES = {
    0x0001: "MakerNoteType",
    0x0002: "FirmwareVersion",
    0x0005: "SerialNumber",
    0x0E00: "PrintIM",
    0x1001: "ImageInfo",
    0x1003: "Sharpness",
    0x2001: "RicohSubdir",
}
