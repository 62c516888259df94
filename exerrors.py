class ExactNumError(ArithmeticError):
    pass

class ParseError(ExactNumError, ValueError):
    '''Text is not a decimal integer (or p/q) literal.'''
    def __init__(self, text, reason='not a decimal literal'):
        self.text = text
        self.reason = reason
        super().__init__(f'{reason}: {text!r}')

class DivisionByZero(ExactNumError, ZeroDivisionError):
    pass
