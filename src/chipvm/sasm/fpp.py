import logging as lg
from typing import List, Tuple, Dict, Any, Callable

from chipvm.common.hwconf import BASE_ADDRESS, OP_SIZE

Tokens = List[Any]
Encoder = Callable[..., int]


class FPP:
    ''' First pass processor '''
    cmd_list: List[Tuple[str, Any]]
    label_dict: Dict[str, int]

    def __init__(self):
        self.cmd_list = list()
        self.offset = 0
        self.namespace = '<global>'
        self.label_dict = dict()

    def address(self) -> int:
        return BASE_ADDRESS + self.offset

    # Handlers
    def on_label(self, tokens: Tokens):
        labelname = str(tokens[0])

        if labelname in self.label_dict:
            raise UserWarning(f'Label {labelname} redefined in {self.namespace}')

        self.label_dict[labelname] = self.address()
        lg.debug(f'Label {labelname} @ 0x{self.address():X}')

    def issue_bytes(self, tokens: Tokens):
        for value in tokens:
            if not 0 <= value <= 0xFF:
                raise UserWarning(f'Byte {value} out of range')

        self.cmd_list.append(('bytes', bytes(tokens)))
        self.offset += len(tokens)

    def issue_ins(self, arg: Tuple[Encoder, Tokens]):
        encode, operands = arg
        self.cmd_list.append(('ins', (self.address(), encode, operands)))
        self.offset += OP_SIZE
