"""ASCII art for the aquarium scene. Spaces are transparent when stamped."""

from __future__ import annotations

from typing import Dict, List

FISH_TINY: Dict[int, List[str]] = {
    -1: ["<°)))><"],
    1: ["><(((('>"],
}

FISH_SMALL: Dict[int, List[str]] = {
    -1: [
        "  _///_",
        " /o    \\/",
        " > ))_./\\",
        "    <",
    ],
    1: [
        "     |\\    o",
        "    |  \\    o",
        "|\\ /    .\\ o",
        "| |       (",
        "|/ \\     /",
        "    |  /",
        "     |/",
    ],
}

FISH_MEDIUM_LEFT: List[List[str]] = [
    [
        "          ,,////,",
        "        _////////_",
        "      .' -,  / / /`'-._     _.-'|",
        "     / _  \\\\/ / / / /  ',.='_.'/",
        "    / (o)  ||/_/_/_/_/_/_.-'_.'",
        "  .'       ||\\ \\ \\ \\ \\ \\ '-._'.",
        " '.--.    //\\ \\ \\ \\ \\  .'\"-._ '.",
        "   `'-.\\ \\   \\ \\ \\__.-'\\)    '-.|",
        "       \\\\)`\"\"\"\"\"` ",
        "        `",
    ],
    [
        "                ,      /",
        "             . ~ ~ . ,/{",
        "           .'@ ))ejm'~.~",
        "           = - ~``   ",
    ],
]

FISH_MEDIUM_RIGHT: List[str] = [
    "\\o    o",
    " \\     \\",
    "  )=====>",
    " /     /",
    "/o    o",
]

FISH_LARGE_LEFT: List[List[str]] = [
    [
        "                 __,",
        "               .-'_-'`",
        "             .' {`",
        "         .-'````'-.    .-'``'.",
        "       .'(0)       '._/ _.-.  `\\",
        "      }     '. ))    _<`    )`  |",
        "       `-.,\\'.\\_, -\\` \\`---; .' /",
        "            )  )       '-.  '--:",
        "           ( ' (          ) '.  \\",
        "            '.  )      .'(   /   )",
        "              )/      (   '.    /",
        "                       '._( ) .'",
        "                           ( (",
        "                            `-.",
    ],
    [
        "    o   o",
        "                  /^^^^^7",
        "    '  '     ,oO))))))))Oo,",
        "           ,'))))))))))))))), /{",
        "      '  ,'o  ))))))))))))))))={",
        "         >    ))))))))))))))))={",
        "         `,   ))))))\\\\\\)))))))={ ",
        "           ',))))))))\\/)))))' \\{",
        "             '*O))))))))O*'",
    ],
]

FISH_LARGE_RIGHT: List[str] = [
    "    __,",
    "   / - \\",
    "  (  O  )======>",
    "   \\ - /",
    "    `-'",
]

DIVER: List[str] = [
    "              _______ ______",
    "              |     / |    /",
    "   O          |    /  |   /",
    "              |   /   |  /",
    "o  O 0         \\  \\   \\  \\",
    "o               \\  \\   \\  \\",
    "   o            /  /   /  /",
    "    o     /\\_  /\\\\\\   /  /",
    "     O  /    /    /     /",
    "..       /    /    /\\=    /",
    " ))))))) = /====/    \\",
    "(((((((( /    /\\=  _ }",
    "|-----_|_+( /   \\}",
    "\\_<\\_//|  \\  \\ }",
    "  =Q=  |==)\\  \\",
    "\\----/     ) )",
    "         / /",
    "        /=/",
    "      \\|/",
    "      o}",
]

BOATS: List[List[str]] = [
    [
        "     _",
        "    /|\\",
        "   /_|_\\",
        " ____|____",
        " \\_o_o_o_/",
    ],
    [
        "                __/___            ",
        "          _____/______|           ",
        "  _______/_____\\_______\\_____     ",
        "  \\              < < <       |",
    ],
]

ANCHOR: List[str] = [
    "        _-_",
    "       |(_)|",
    "        |||",
    "        |||",
    "        |||",
    "        |||",
    "        |||",
    "  ^     |^|     ^",
    "< ^ >   <+>   < ^ >",
    " | |    |||    | |",
    "  \\ \\__/ | \\__/ /",
    "    \\,__.|.__,/",
    "        (_)",
]

MERMAID: List[str] = [
    "                           .-\"\"-.",
    "                          (___/\\ \\",
    "        ,                 (|^ ^ ) )",
    "       /(                _)_\\=_/  (",
    " ,..__/ `\\          ____(_/_ ` \\   )",
    "  `\\    _/        _/---._/(_)_  `\\ (",
    "    '--\\ `-.__..-'    /.    (_), |  )",
    "        `._        ___\\_____.'_| |__/",
    "           `~----\"`   `-.........' ",
]
